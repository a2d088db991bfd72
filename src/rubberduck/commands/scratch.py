"""Open today's scratch note.

Resolves (and if needed creates) today's note, then hands it to the
editor picked from NEOVIM / EDITOR.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rubberduck.core.config import AppConfig
from rubberduck.core.decorators import handle_exceptions
from rubberduck.core.editor import open_in_editor, resolve_editor
from rubberduck.core.scratch import ScratchFileManager


@handle_exceptions
def open_today(config: AppConfig, logger: logging.Logger) -> Path:
    """Ensure today's note exists and block in the editor until it closes."""
    manager = ScratchFileManager.from_config(config, logger=logger)
    result = manager.ensure_today()
    logger.debug("Scratch note %s (%s)", result.path, result.action.value)

    editor_cmd = resolve_editor(env_vars=config.editor_env_vars, default=config.default_editor)
    open_in_editor(result.path, editor_cmd, logger=logger)
    return result.path
