"""Named collection of themes with a single default pointer."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Final

from battray.errors import UnknownThemeError
from battray.themes.models import Theme

logger: Final = logging.getLogger(__name__)


class ThemeRegistry:
    """Maps theme names to themes and tracks the default theme name.

    Later registrations under an existing name replace the earlier theme;
    the default pointer is last-writer-wins and is not checked against the
    registered names when it is set.
    """

    def __init__(self) -> None:
        self._themes: dict[str, Theme] = {}
        self.default_name: str | None = None

    def register(self, theme: Theme, name: str) -> None:
        if name in self._themes:
            logger.debug("Replacing theme %r", name)
        else:
            logger.debug("Registering theme %r", name)
        self._themes[name] = theme

    def make_default(self, name: str) -> None:
        logger.debug("Default theme set to %r", name)
        self.default_name = name

    def get_theme(self, name: str) -> Theme | None:
        return self._themes.get(name)

    def active_theme(self) -> Theme:
        """Return the theme the default pointer names.

        Raises:
            UnknownThemeError: If no default is set or it is not registered
        """
        if self.default_name is None or self.default_name not in self._themes:
            raise UnknownThemeError(self.default_name)
        return self._themes[self.default_name]

    def names(self) -> list[str]:
        return list(self._themes)

    def __contains__(self, name: object) -> bool:
        return name in self._themes

    def __iter__(self) -> Iterator[str]:
        return iter(self._themes)

    def __len__(self) -> int:
        return len(self._themes)
