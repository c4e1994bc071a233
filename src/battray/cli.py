"""Battery tray notifier CLI application.

This module provides the command-line interface: the long-running tray
process, a one-shot status check, and theme file helpers.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Final

import typer

from battray.constants import POLL_INTERVAL_SECONDS, SETTINGS_FILE_NAME
from battray.context import AppContext, load_themes
from battray.errors import BattrayError, ShapeMismatchError
from battray.monitor import BatteryMonitor
from battray.settings import ConfigPaths, UserSettings, user_config_dir
from battray.system.acpi import AcpiBatterySource, BatterySource, StaticBatterySource
from battray.themes.parser import ThemeFileParser
from battray.themes.registry import ThemeRegistry

STARTUP_ERRORS: Final = (BattrayError, FileNotFoundError)

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Battery tray notifier", add_completion=False)
themes_app = typer.Typer(help="Theme file helpers")
app.add_typer(themes_app, name="themes")

logger: Final = logging.getLogger(__name__)  # Will be "battray.cli"

SETTINGS_OPTION = typer.Option(
    None, "--settings", "-s", exists=True, dir_okay=False, help="settings.yaml to use"
)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
REPORT_OPTION = typer.Option(
    None,
    "--report",
    "-r",
    exists=True,
    dir_okay=False,
    help="Read battery output from a file instead of running the battery command",
)


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def _load_settings(path: Path | None) -> UserSettings:
    """Explicit path, then $BATTRAY_SETTINGS, then the user's settings.yaml."""
    if path is None and not os.environ.get(UserSettings.ENV_VAR):
        candidate = user_config_dir() / SETTINGS_FILE_NAME
        if candidate.is_file():
            path = candidate
    return UserSettings.load(path)


def _startup(settings_path: Path | None) -> tuple[UserSettings, AppContext]:
    settings = _load_settings(settings_path)
    context = AppContext.from_settings(settings)
    load_themes(context, ConfigPaths.discover(settings.system_config_dir))
    return settings, context


def _fail(exc: Exception) -> typer.Exit:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    return typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Start the tray notifier when no command is given."""
    if ctx.invoked_subcommand is None:
        run(settings=None, debug=False)


@app.command()
def run(settings: Path | None = SETTINGS_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Run the tray notifier until the process is killed."""
    _configure_logging(debug)
    try:
        user_settings, context = _startup(settings)
    except STARTUP_ERRORS as exc:
        raise _fail(exc) from exc

    # GTK is only needed for the tray process itself
    from battray.display.gtk import GtkMainLoop, GtkTrayIcon, create_notifier

    monitor = BatteryMonitor(
        context,
        source=AcpiBatterySource(user_settings.battery_command),
        tray=GtkTrayIcon(),
        notifier=create_notifier(user_settings.use_notifications),
    )
    GtkMainLoop(POLL_INTERVAL_SECONDS).run(monitor.poll)


@app.command()
def status(
    settings: Path | None = SETTINGS_OPTION,
    report: Path | None = REPORT_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Read the battery once and show what the tray would display."""
    _configure_logging(debug)
    try:
        user_settings, context = _startup(settings)
    except STARTUP_ERRORS as exc:
        raise _fail(exc) from exc

    source: BatterySource
    if report is not None:
        source = StaticBatterySource(report.read_text(encoding="utf-8"))
    else:
        source = AcpiBatterySource(user_settings.battery_command)

    reading = source.read()
    if reading is None:
        typer.echo("No battery found")
        raise typer.Exit(code=1)

    theme = context.registry.active_theme()
    evaluation = context.evaluator.evaluate(theme, reading.direction, reading.level)

    typer.echo(f"Theme: {context.registry.default_name}")
    typer.echo(f"Level: {reading.level:.1f}% ({reading.direction.value})")
    typer.echo(f"Icon: {evaluation.icon_path if evaluation.visible else 'hidden'}")
    for line in reading.battery_lines:
        typer.echo(f"  {line}")


# ───────────────────────── themes sub-commands ───────────────────────────────
@themes_app.command("list")
def list_themes(settings: Path | None = SETTINGS_OPTION) -> None:
    """List registered themes; the default is marked with '*'."""
    try:
        _, context = _startup(settings)
    except STARTUP_ERRORS as exc:
        raise _fail(exc) from exc

    for name in context.registry:
        marker = "*" if name == context.registry.default_name else " "
        typer.echo(f"{marker} {name}")


@themes_app.command("validate")
def validate_themes(file: Path) -> None:
    """Parse a theme file and report problems."""
    parser = ThemeFileParser(ThemeRegistry())
    try:
        last = parser.parse_file(file)
    except (ShapeMismatchError, OSError) as exc:
        raise _fail(exc) from exc

    for problem in parser.problems:
        typer.secho(f"warning: {problem}", fg=typer.colors.YELLOW, err=True)

    if last is None:
        typer.echo("No themes found")
        return
    typer.echo(f"✅ {len(parser.registry)} theme(s) valid, last is {last!r}")


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
