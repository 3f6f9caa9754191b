from __future__ import annotations

# Local git operations (rev-parse)
GIT_TIMEOUT_SECONDS = 30.0

# gh release create talks to the GitHub API
GH_TIMEOUT_SECONDS = 60.0
