"""Collaborators outside the theme engine: battery source and scripts."""

from .acpi import AcpiBatterySource, BatterySource, PollResult, StaticBatterySource, parse_battery_report
from .scripts import CommandCallback, ScriptApi, run_script

__all__ = [
    "AcpiBatterySource",
    "BatterySource",
    "CommandCallback",
    "PollResult",
    "ScriptApi",
    "StaticBatterySource",
    "parse_battery_report",
    "run_script",
]
