"""Exception classes and recoverable problem records.

Fatal conditions are raised as subclasses of ``BattrayError``. Recoverable
parse problems are plain records: they are logged through the warning
channel and collected by the parsers, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass


class BattrayError(Exception):
    """Base class for all battray errors."""


class ShapeMismatchError(BattrayError):
    """Raised when a step set does not match the theme's declared step count.

    A step set assigned before any step count was declared is reported with
    ``expected`` set to ``None``.
    """

    def __init__(self, expected: int | None, actual: int) -> None:
        """Initialize the exception.

        Args:
            expected: Step count declared on the theme, if any
            actual: Number of steps actually supplied
        """
        if expected is None:
            message = f"step set has {actual} entries, theme declares no step count yet"
        else:
            message = f"step set has {actual} entries, theme declares {expected}"
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class InvalidDirectionError(BattrayError, ValueError):
    """Raised for a direction token other than charging/discharging."""

    def __init__(self, token: object) -> None:
        super().__init__(f"invalid direction {token!r}, expected 'charging' or 'discharging'")
        self.token = token


class UnknownThemeError(BattrayError, KeyError):
    """Raised when the default theme pointer names no registered theme."""

    def __init__(self, name: str | None) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        if self.name is None:
            return "no default theme has been set"
        return f"default theme {self.name!r} is not registered"


class MissingHomeConfigError(BattrayError):
    """Raised when neither XDG_CONFIG_HOME nor HOME is set."""

    def __init__(self) -> None:
        super().__init__(
            "cannot locate the user config directory: set XDG_CONFIG_HOME or HOME"
        )


class ScriptError(BattrayError):
    """Raised when a configuration script fails."""

    def __init__(self, path: object, original_error: Exception) -> None:
        """Initialize with script failure details.

        Args:
            path: Script that was executed
            original_error: The exception the script raised
        """
        super().__init__(f"script {path} failed: {original_error}")
        self.path = path
        self.original_error = original_error


class NotificationError(BattrayError):
    """Raised when a notification backend cannot deliver a message."""


class SettingsError(BattrayError, RuntimeError):
    """Raised when the settings file cannot be read or is invalid."""


# ── recoverable problems ─────────────────────────────────────────────────────
@dataclass(frozen=True)
class UnparseableEntry:
    """A step definition entry that was dropped."""

    entry: str
    reason: str

    def __str__(self) -> str:
        return f"unparseable entry {self.entry!r}: {self.reason}"


@dataclass(frozen=True)
class UnparseableLine:
    """A theme file line that was ignored."""

    line_number: int
    text: str
    reason: str = "unrecognized line"
    source: str = "<string>"

    def __str__(self) -> str:
        return f"{self.source}:{self.line_number}: unparseable line {self.text!r} ({self.reason})"
