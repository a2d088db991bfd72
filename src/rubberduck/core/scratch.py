"""Daily scratch-note resolution, seeding, and cloning.

One note exists per calendar day, named ``YYYYMMDD-scratch.md`` under
``~/Documents/rubberducks``. When today's note is missing it is either
seeded with a fresh heading or cloned from the newest earlier note with
its heading block replaced.
"""

from __future__ import annotations

import datetime as dt
import enum
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import IO, TYPE_CHECKING

from rubberduck.core.console import get_logger
from rubberduck.core.errors import HomeDirectoryError, ScratchFileError

if TYPE_CHECKING:
    from rubberduck.core.config import AppConfig

SCRATCH_SUFFIX = "-scratch.md"
SCRATCH_SUBDIR = Path("Documents") / "rubberducks"
HEADING_MARKER = "#"
HEADING_RULE = "# ─────────────────────────────"
DIR_MODE = 0o755
# Keep undecodable bytes intact when copying a note forward.
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"


class ScratchAction(enum.Enum):
    """How today's note came to be."""

    EXISTING = "existing"
    SEEDED = "seeded"
    CLONED = "cloned"


@dataclass(frozen=True)
class ScratchResult:
    path: Path
    action: ScratchAction
    source: Path | None = None


def resolve_scratch_dir(home: Path | None = None) -> Path:
    """Return ``<home>/Documents/rubberducks``."""
    if home is None:
        try:
            home = Path.home()
        except RuntimeError as exc:
            raise HomeDirectoryError(f"Cannot determine home directory: {exc}") from exc
    return home / SCRATCH_SUBDIR


def scratch_filename(day: dt.date, suffix: str = SCRATCH_SUFFIX) -> str:
    """Name of the note for ``day``; fixed-width so names sort by date."""
    return f"{day.year:04d}{day.month:02d}{day.day:02d}{suffix}"


def render_heading(day: dt.date) -> str:
    return f"{HEADING_RULE}\n# scratch for {day.isoformat()}\n{HEADING_RULE}\n"


def split_lines(text: str) -> list[str]:
    """Split on ``\\n``, dropping one trailing ``\\r`` per line and the empty tail."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def rewrite_heading(lines: Iterable[str], day: dt.date) -> Iterator[str]:
    """Yield the cloned note: old heading block dropped, fresh heading, body verbatim."""
    heading = render_heading(day) + "\n"
    in_heading = True
    for line in lines:
        if in_heading:
            if line.startswith(HEADING_MARKER):
                continue
            yield heading
            in_heading = False
        yield line + "\n"
    if in_heading:
        yield heading


def _open_exclusive(path: Path) -> IO[str] | None:
    """Create ``path`` for writing, or return None if another run already made it."""
    try:
        return path.open("x", encoding=ENCODING, errors=ENCODING_ERRORS)
    except FileExistsError:
        if path.is_file():
            return None
        raise ScratchFileError(
            "Today's scratch path exists but is not a file", context={"path": path}
        ) from None
    except OSError as exc:
        raise ScratchFileError(
            "Couldn't create scratch file", context={"path": path, "error": exc}
        ) from exc


class ScratchFileManager:
    """Make sure today's scratch note exists in ``scratch_dir``.

    ``today`` pins the calendar date (tests, backfills); by default the local
    date is read once, at construction.
    """

    def __init__(
        self,
        scratch_dir: Path,
        *,
        logger: logging.Logger | None = None,
        suffix: str = SCRATCH_SUFFIX,
        today: dt.date | None = None,
    ) -> None:
        self.scratch_dir = scratch_dir
        self.suffix = suffix
        self.today = today or dt.date.today()
        self.logger = logger or get_logger(__name__)

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        logger: logging.Logger | None = None,
        today: dt.date | None = None,
    ) -> ScratchFileManager:
        scratch_dir = config.scratch_dir or resolve_scratch_dir()
        return cls(scratch_dir, logger=logger, suffix=config.file_suffix, today=today)

    @property
    def today_path(self) -> Path:
        return self.scratch_dir / scratch_filename(self.today, self.suffix)

    @property
    def swap_path(self) -> Path:
        return self.scratch_dir / f".{self.today_path.name}.swp"

    def ensure_today(self) -> ScratchResult:
        """Return today's note, creating it first if needed."""
        path = self.today_path
        if path.is_file():
            self.logger.info("Already got today's scratch. Opening it...")
            self._warn_stale_swap()
            return ScratchResult(path=path, action=ScratchAction.EXISTING)

        self.ensure_dir()
        newest = self.newest_scratch_file()
        if newest is None:
            self.logger.info("No scratch files found; conjuring a fresh one...")
            self.seed(path)
            return ScratchResult(path=path, action=ScratchAction.SEEDED)

        self.logger.info("Found previous scratch %s, forging new daily file...", newest.name)
        self.clone(newest, path)
        return ScratchResult(path=path, action=ScratchAction.CLONED, source=newest)

    def ensure_dir(self) -> None:
        try:
            self.scratch_dir.mkdir(mode=DIR_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise ScratchFileError(
                "Couldn't create scratch directory",
                context={"path": self.scratch_dir, "error": exc},
            ) from exc

    def list_scratch_files(self) -> list[str]:
        """Sorted names of the scratch notes directly under ``scratch_dir``."""
        try:
            names = [
                entry.name
                for entry in self.scratch_dir.iterdir()
                if entry.name.endswith(self.suffix) and not entry.is_dir()
            ]
        except OSError as exc:
            raise ScratchFileError(
                "Trouble reading scratch directory",
                context={"path": self.scratch_dir, "error": exc},
            ) from exc
        return sorted(names)

    def newest_scratch_file(self) -> Path | None:
        names = self.list_scratch_files()
        if not names:
            return None
        return self.scratch_dir / names[-1]

    def seed(self, path: Path) -> None:
        """Write a note holding only today's heading."""
        handle = _open_exclusive(path)
        if handle is None:
            self.logger.warning("%s appeared while seeding; leaving it as is.", path.name)
            return
        try:
            with handle:
                handle.write(render_heading(self.today) + "\n")
        except OSError as exc:
            raise ScratchFileError(
                "Failed to write to scratch file", context={"path": path, "error": exc}
            ) from exc
        self.logger.debug("Seeded %s", path)

    def clone(self, source: Path, path: Path) -> None:
        """Copy ``source`` to ``path`` with its heading block replaced by today's."""
        try:
            # newline="" leaves CR handling to split_lines; a lone \r stays in its line.
            with source.open(encoding=ENCODING, errors=ENCODING_ERRORS, newline="") as src:
                text = src.read()
        except OSError as exc:
            raise ScratchFileError(
                "Couldn't read old scratch file", context={"path": source, "error": exc}
            ) from exc

        handle = _open_exclusive(path)
        if handle is None:
            self.logger.warning("%s appeared while cloning; leaving it as is.", path.name)
            return
        try:
            with handle:
                handle.writelines(rewrite_heading(split_lines(text), self.today))
        except OSError as exc:
            raise ScratchFileError(
                "Error copying lines into new scratch file",
                context={"path": path, "error": exc},
            ) from exc
        self.logger.debug("Cloned %s -> %s", source, path)

    def _warn_stale_swap(self) -> None:
        if self.swap_path.exists():
            self.logger.warning(
                "Swap file %s is still around; a previous edit may not have exited cleanly.",
                self.swap_path.name,
            )
