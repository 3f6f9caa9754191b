from __future__ import annotations

from dataclasses import dataclass

import typer

from crafty.core.config import Config, load_config_or_default
from crafty.core.errors import ErrorCode
from crafty.core.result import Err
from crafty.output.console import ConsoleProtocol, RichConsole
from crafty.platform.paths import default_config_path
from crafty.repo.http import HttpClient, RealHttpClient


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    http: HttpClient
    console: ConsoleProtocol


def build_context() -> CLIContext:
    path = default_config_path()
    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config = config_result.value
    return CLIContext(
        config=config,
        http=RealHttpClient(timeout=config.network.timeout),
        console=RichConsole(),
    )
