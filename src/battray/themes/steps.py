"""Parser for the compact step definition grammar.

A definition is a comma separated list of ``max:icon[:alt_icon]`` entries,
for example ``"2:missing.png:low.png, 10:low.png, 100:full.png"``. Each
step covers the levels above the previous entry's maximum (0 for the first)
up to and including its own maximum.
"""

from __future__ import annotations

import logging
from typing import Final

from battray.errors import UnparseableEntry
from battray.themes.models import Step, StepSet

logger: Final = logging.getLogger(__name__)


def _parse_entry(entry: str, minimum: float) -> Step | UnparseableEntry:
    if ":" not in entry:
        return UnparseableEntry(entry, "missing colon")

    fields = entry.split(":", 2)
    try:
        maximum = float(fields[0].strip())
    except ValueError:
        return UnparseableEntry(entry, f"invalid maximum {fields[0].strip()!r}")

    icon = fields[1].strip()
    if not icon:
        return UnparseableEntry(entry, "missing icon")

    alt_icon = fields[2].strip() if len(fields) == 3 else ""
    return Step(minimum=minimum, maximum=maximum, icon=icon, alt_icon=alt_icon or None)


def parse_steps(
    definition: str,
    step_count: int,
    problems: list[UnparseableEntry] | None = None,
) -> StepSet:
    """Build a step set from a textual definition.

    The definition is split into at most ``step_count`` fields, so a comma
    inside the last entry's icon name stays part of that name. Malformed
    entries are logged and skipped without consuming a slot; the caller's
    shape check catches the resulting count mismatch.

    Args:
        definition: Comma separated ``max:icon[:alt_icon]`` entries
        step_count: Number of steps the theme declares
        problems: Optional list that receives every dropped entry

    Returns:
        The parsed steps in input order
    """
    steps: StepSet = []
    minimum = 0.0

    for raw in definition.split(",", max(step_count - 1, 0)):
        entry = raw.strip()
        result = _parse_entry(entry, minimum)
        if isinstance(result, UnparseableEntry):
            logger.warning("%s", result)
            if problems is not None:
                problems.append(result)
            continue
        steps.append(result)
        minimum = result.maximum

    return steps
