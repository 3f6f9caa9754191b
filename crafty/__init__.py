"""crafty - manage ArchCraft packages from GitHub."""

__version__ = "0.3.0"
