"""Editor resolution and the blocking editor hand-off."""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
from collections.abc import Mapping, Sequence
from pathlib import Path

from rubberduck.core.console import get_logger
from rubberduck.core.errors import EditorError

EDITOR_ENV_VARS: tuple[str, ...] = ("NEOVIM", "EDITOR")
DEFAULT_EDITOR = "nvim"


def resolve_editor(
    env: Mapping[str, str] | None = None,
    env_vars: Sequence[str] = EDITOR_ENV_VARS,
    default: str = DEFAULT_EDITOR,
) -> list[str]:
    """Return the editor argv from the first non-empty variable in ``env_vars``.

    Values are split shell-style so ``EDITOR="code -w"`` works.
    """
    env = os.environ if env is None else env
    for name in env_vars:
        value = env.get(name, "").strip()
        if value:
            return _split_command(value, source=name)
    return _split_command(default, source="default_editor")


def _split_command(value: str, *, source: str) -> list[str]:
    try:
        return shlex.split(value)
    except ValueError as exc:
        raise EditorError(
            "Invalid editor command",
            context={"editor": value, "source": source, "error": exc},
        ) from exc


async def launch_editor(editor_cmd: Sequence[str], path: Path) -> int:
    """Run the editor on ``path`` with inherited stdio and wait for it."""
    proc = await asyncio.create_subprocess_exec(*editor_cmd, str(path))
    return await proc.wait()


def open_in_editor(
    path: Path,
    editor_cmd: Sequence[str],
    *,
    logger: logging.Logger | None = None,
) -> int:
    """Hand ``path`` to the editor and block until it exits.

    Raises EditorError when the editor cannot start or exits non-zero.
    """
    logger = logger or get_logger(__name__)
    if not editor_cmd:
        raise EditorError("Editor command is empty")

    logger.debug("Launching %s on %s", shlex.join(editor_cmd), path)
    try:
        exit_code = asyncio.run(launch_editor(editor_cmd, path))
    except FileNotFoundError as exc:
        raise EditorError(
            "Editor not found", context={"editor": editor_cmd[0], "error": exc}
        ) from exc
    except OSError as exc:
        raise EditorError(
            "Failed to launch editor", context={"editor": editor_cmd[0], "error": exc}
        ) from exc

    # A negative status means the editor died from signal -N.
    if exit_code != 0:
        raise EditorError(
            f"Editor exited with code {exit_code}",
            context={"editor": editor_cmd[0]},
            exit_code=exit_code if exit_code > 0 else 128 - exit_code,
        )
    return exit_code
