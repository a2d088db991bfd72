"""rubberduck - one scratch note per day, opened straight in your editor.

This package provides the `scratch` command-line tool: it resolves today's
note under ~/Documents/rubberducks, seeds or clones it when missing, and
hands it to the configured editor.

Exports:
    __version__: Package version string.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.3.0"
