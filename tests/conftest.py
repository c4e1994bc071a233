from pathlib import Path

import pytest

from battray.context import AppContext
from battray.themes import Theme, ThemeRegistry, parse_steps

EXAMPLE_STEPS = "2:missing.png:low.png, 10:low.png, 100:full.png"

THEMES_CONF = """\
[default]
steps = 3
dir = /icons/default
charging = 10:charging-low.png, 90:charging.png, 100:charged.png
discharging = 2:missing.png:low.png, 10:low.png, 100:full.png
"""


@pytest.fixture
def registry() -> ThemeRegistry:
    return ThemeRegistry()


@pytest.fixture
def context() -> AppContext:
    return AppContext()


@pytest.fixture
def example_theme() -> Theme:
    theme = Theme(base_dir=Path("/icons"))
    theme.set_step_count(3)
    theme.set_charging(parse_steps("10:c-low.png, 90:c.png, 100:c-full.png", 3))
    theme.set_discharging(parse_steps(EXAMPLE_STEPS, 3))
    return theme


@pytest.fixture
def write_file(tmp_path: Path):
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
