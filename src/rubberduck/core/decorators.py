from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import typer
from rich.markup import escape

from rubberduck.core import console as core_console
from rubberduck.core.errors import RubberduckError

F = TypeVar("F", bound=Callable[..., Any])


def _handle_exception(exc: RubberduckError) -> NoReturn:
    core_console.stderr_console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
    raise typer.Exit(code=exc.exit_code)


def handle_exceptions(func: F) -> F:
    """Decorate CLI entrypoints to present friendly errors and exit cleanly."""

    @functools.wraps(func)
    def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except RubberduckError as exc:
            _handle_exception(exc)

    return sync_wrapper  # type: ignore[return-value]


__all__ = ["handle_exceptions"]
