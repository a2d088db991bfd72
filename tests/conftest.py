from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def isolate_home(tmp_path: Path, monkeypatch: Any) -> Path:
    """Point HOME at a temp dir so tests never touch real notes."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, monkeypatch: Any) -> Path:
    """Point config to a temp path so tests don't touch user state."""
    cfg_path = tmp_path / "config.toml"
    monkeypatch.setenv("RUBBERDUCK_CONFIG", str(cfg_path))
    for var in ("RUBBERDUCK_SCRATCH_DIR", "RUBBERDUCK_LOG_LEVEL", "RUBBERDUCK_DEFAULT_EDITOR"):
        monkeypatch.delenv(var, raising=False)
    return cfg_path


@pytest.fixture(autouse=True)
def clear_editor_env(monkeypatch: Any) -> None:
    monkeypatch.delenv("NEOVIM", raising=False)
    monkeypatch.delenv("EDITOR", raising=False)


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use an in-memory Rich console during tests."""
    test_console = Console(record=True, width=200)
    import rubberduck.core.console as core_console
    import rubberduck.main as rd_main

    monkeypatch.setattr(core_console, "console", test_console)
    monkeypatch.setattr(rd_main, "console", test_console)
    return test_console


@pytest.fixture(autouse=True)
def capture_stderr(monkeypatch: Any) -> Console:
    """Record error reports and log output sent to the stderr console."""
    test_console = Console(record=True, width=200, stderr=True)
    import rubberduck.core.console as core_console

    monkeypatch.setattr(core_console, "stderr_console", test_console)
    return test_console
