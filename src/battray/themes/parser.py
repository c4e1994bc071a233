"""Line-oriented parser for theme files.

Theme files hold one block per theme::

    [default]
    steps = 3
    dir = /usr/share/battray/icons/default
    charging = 10:charging-low.png, 90:charging.png, 100:charged.png
    discharging = 2:empty.png:low.png, 10:low.png, 100:full.png

Every line is first classified into one of the tagged line variants below,
then applied to the theme in progress. A theme is registered when the next
section header starts or at the end of the input.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Union

from battray.constants import SYSTEM_ICON_DIR
from battray.errors import UnparseableEntry, UnparseableLine
from battray.themes.models import StepSet, Theme
from battray.themes.registry import ThemeRegistry
from battray.themes.steps import parse_steps

logger: Final = logging.getLogger(__name__)

_SECTION_RE: Final = re.compile(r"^\[(?P<name>[^\]]+)\]$")
_KEY_VALUE_RE: Final = re.compile(r"^(?P<key>[A-Za-z_][\w-]*)\s*=\s*(?P<value>.*)$")


# ── line variants ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class BlankLine:
    pass


@dataclass(frozen=True)
class CommentLine:
    text: str


@dataclass(frozen=True)
class SectionHeader:
    name: str


@dataclass(frozen=True)
class KeyValue:
    key: str
    value: str


@dataclass(frozen=True)
class Unrecognized:
    text: str


ThemeLine = Union[BlankLine, CommentLine, SectionHeader, KeyValue, Unrecognized]


def classify_line(text: str) -> ThemeLine:
    """Classify one raw line of a theme file.

    Args:
        text: The line, with or without its trailing newline

    Returns:
        The matching line variant
    """
    stripped = text.strip()
    if not stripped:
        return BlankLine()
    if stripped.startswith(("#", ";")):
        return CommentLine(stripped)

    section = _SECTION_RE.match(stripped)
    if section:
        return SectionHeader(section.group("name").strip())

    pair = _KEY_VALUE_RE.match(stripped)
    if pair:
        return KeyValue(pair.group("key").lower(), pair.group("value").strip())

    return Unrecognized(stripped)


# ── parser ───────────────────────────────────────────────────────────────────
class ThemeFileParser:
    """Builds themes from theme file lines and registers them.

    Recoverable problems are logged and collected in ``problems``. A step
    set whose size differs from the declared step count raises
    ``ShapeMismatchError`` and aborts the parse; this includes step sets
    that appear before the ``steps`` line of their block.
    """

    def __init__(self, registry: ThemeRegistry, default_dir: Path = SYSTEM_ICON_DIR) -> None:
        self.registry = registry
        self.default_dir = Path(default_dir)
        self.problems: list[UnparseableLine | UnparseableEntry] = []

    def parse_file(self, path: Path) -> str | None:
        """Parse a theme file from disk.

        Returns:
            Name of the last theme in the file, or None if it declares none
        """
        path = Path(path)
        logger.debug("Parsing theme file %s", path)
        with path.open(encoding="utf-8") as fh:
            return self.parse_lines(fh, source=str(path))

    def parse_lines(self, lines: Iterable[str], source: str = "<string>") -> str | None:
        """Parse theme file lines top to bottom.

        Args:
            lines: Raw lines of the file
            source: Name used when reporting problems

        Returns:
            Name of the last theme encountered, or None
        """
        current: Theme | None = None
        current_name: str | None = None

        for number, text in enumerate(lines, start=1):
            line = classify_line(text)

            if isinstance(line, (BlankLine, CommentLine)):
                continue

            if isinstance(line, SectionHeader):
                if current is not None and current_name is not None:
                    self.registry.register(current, current_name)
                current = Theme(base_dir=self.default_dir)
                current_name = line.name
                continue

            if isinstance(line, Unrecognized):
                self._report(UnparseableLine(number, line.text, source=source))
                continue

            if current is None:
                self._report(
                    UnparseableLine(number, text.strip(), "outside of a theme block", source)
                )
                continue

            reason = self._apply(current, line)
            if reason is not None:
                self._report(UnparseableLine(number, text.strip(), reason, source))

        if current is not None and current_name is not None:
            self.registry.register(current, current_name)

        return current_name

    def _apply(self, theme: Theme, pair: KeyValue) -> str | None:
        """Apply one key/value line; return a problem description or None."""
        if pair.key == "steps":
            try:
                count = int(pair.value)
            except ValueError:
                return "steps must be an integer"
            if count <= 0:
                return "steps must be positive"
            theme.set_step_count(count)
        elif pair.key == "dir":
            theme.set_dir(pair.value)
        elif pair.key == "charging":
            theme.set_charging(self._steps(theme, pair.value))
        elif pair.key == "discharging":
            theme.set_discharging(self._steps(theme, pair.value))
        else:
            return f"unknown key {pair.key!r}"
        return None

    def _steps(self, theme: Theme, definition: str) -> StepSet:
        entries: list[UnparseableEntry] = []
        steps = parse_steps(definition, theme.step_count or 0, entries)
        self.problems.extend(entries)
        return steps

    def _report(self, problem: UnparseableLine) -> None:
        logger.warning("%s", problem)
        self.problems.append(problem)


def parse_theme_file(
    path: Path, registry: ThemeRegistry, default_dir: Path = SYSTEM_ICON_DIR
) -> str | None:
    """Parse a theme file into ``registry``.

    Args:
        path: Theme file to read
        registry: Registry receiving every theme in the file
        default_dir: Icon directory each new theme starts with

    Returns:
        Name of the last theme in the file, for the caller to make default

    Raises:
        ShapeMismatchError: If a step set does not match its step count
    """
    return ThemeFileParser(registry, default_dir).parse_file(path)
