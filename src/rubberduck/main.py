from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.markup import escape
from rich.panel import Panel

from . import __version__
from .commands.scratch import open_today
from .core.config import AppConfig, ConfigLoadResult, load_config
from .core.console import console, setup_logging

app = typer.Typer(
    help="scratch: open today's rubberduck note, cloning yesterday's if needed.",
    add_completion=False,
)


@dataclass
class AppState:
    config: AppConfig
    config_meta: ConfigLoadResult
    logger: logging.Logger


def _version_callback(value: bool) -> None:
    if value:
        console.print(__version__)
        raise typer.Exit()


@app.command()
def main(
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Path to a rubberduck config file (TOML or JSON)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Print the rubberduck version and exit.",
    ),
) -> None:
    """Open today's scratch note in your editor."""
    loaded_config, meta = load_config(config_path=config)
    logger = setup_logging(level=loaded_config.log_level, verbose=verbose)
    state = AppState(config=loaded_config, config_meta=meta, logger=logger)

    if meta.error:
        console.print(
            Panel(
                f"[bold red]Configuration Error - Safe Mode Active[/bold red]\n\n"
                f"Failed to load {escape(str(meta.path))}:\n{escape(meta.error)}\n\n"
                f"[yellow]Using default settings.[/yellow]",
                border_style="red",
            )
        )
    else:
        logger.debug(
            "Loaded configuration from %s (file loaded: %s, env overrides: %s)",
            meta.path,
            meta.file_loaded,
            sorted(meta.env_overrides),
        )

    open_today(state.config, state.logger)


def cli() -> None:
    app()


if __name__ == "__main__":
    cli()
