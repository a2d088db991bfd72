"""Error hierarchy for rubberduck.

Every failure the tool can hit is fatal: the command layer reports the
message and exits with ``exit_code``. Errors carry an optional context
mapping so the report names the path or command involved.
"""

from __future__ import annotations

from typing import Any


class RubberduckError(Exception):
    """Base exception for all rubberduck errors."""

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        exit_code: int = 1,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.exit_code = exit_code

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} [{ctx_str}]"
        return self.message


class HomeDirectoryError(RubberduckError):
    """Raised when the user's home directory cannot be determined."""


class ScratchFileError(RubberduckError):
    """Raised when a scratch directory or file operation fails.

    Examples:
    - Scratch directory cannot be created or listed
    - Previous note cannot be read
    - Today's note cannot be created or written
    """


class EditorError(RubberduckError):
    """Raised when the editor cannot be launched or exits non-zero.

    ``exit_code`` mirrors the editor's own status when it ran.
    """


class ConfigError(RubberduckError):
    """Raised when configuration cannot be loaded or validated."""


__all__ = [
    "RubberduckError",
    "HomeDirectoryError",
    "ScratchFileError",
    "EditorError",
    "ConfigError",
]
