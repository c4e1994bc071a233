from pathlib import Path

import pytest

from battray.constants import DEFAULT_BATTERY_COMMAND, SYSTEM_CONFIG_DIR
from battray.errors import MissingHomeConfigError, SettingsError
from battray.settings import ConfigPaths, UserSettings, user_config_dir


def test_defaults() -> None:
    cfg = UserSettings()

    assert cfg.warning_thresholds == [10, 5, 3]
    assert cfg.battery_command == list(DEFAULT_BATTERY_COMMAND)
    assert cfg.system_config_dir == SYSTEM_CONFIG_DIR
    assert cfg.use_notifications is True


def test_load_without_path_or_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(UserSettings.ENV_VAR, raising=False)

    assert UserSettings.load() == UserSettings()


def test_load_yaml(write_file) -> None:
    path = write_file(
        "settings.yaml",
        "warning_thresholds: [15, 8]\n"
        "battery_command: [cat, /tmp/acpi.txt]\n"
        "use_notifications: false\n",
    )

    cfg = UserSettings.load(path)

    assert cfg.warning_thresholds == [15, 8]
    assert cfg.battery_command == ["cat", "/tmp/acpi.txt"]
    assert cfg.use_notifications is False


def test_load_from_env_var(write_file, monkeypatch: pytest.MonkeyPatch) -> None:
    path = write_file("custom.yaml", "icon_dir: /opt/icons\n")
    monkeypatch.setenv(UserSettings.ENV_VAR, str(path))

    assert UserSettings.load().icon_dir == Path("/opt/icons")


def test_env_interpolation(write_file, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BATTRAY_TEST_ICONS", "/srv/icons")
    path = write_file("settings.yaml", 'icon_dir: "${BATTRAY_TEST_ICONS}/dark"\n')

    assert UserSettings.load(path).icon_dir == Path("/srv/icons/dark")


def test_empty_file_gives_defaults(write_file) -> None:
    assert UserSettings.load(write_file("settings.yaml", "")) == UserSettings()


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        UserSettings.load(tmp_path / "nope.yaml")


@pytest.mark.parametrize(
    "content",
    [
        "warning_thresholds: [10, 120]\n",
        "warning_thresholds: [-1]\n",
        "battery_command: []\n",
        "use_notifications: maybe\n",
    ],
)
def test_invalid_settings(write_file, content: str) -> None:
    with pytest.raises(SettingsError, match="Invalid settings"):
        UserSettings.load(write_file("settings.yaml", content))


def test_threshold_order_is_kept() -> None:
    assert UserSettings(warning_thresholds=[3, 10, 5]).warning_thresholds == [3, 10, 5]


@pytest.mark.parametrize(
    "environ, expected",
    [
        ({"XDG_CONFIG_HOME": "/xdg", "HOME": "/home/u"}, Path("/xdg/battray")),
        ({"HOME": "/home/u"}, Path("/home/u/.config/battray")),
        ({"XDG_CONFIG_HOME": "", "HOME": "/home/u"}, Path("/home/u/.config/battray")),
    ],
)
def test_user_config_dir(environ: dict[str, str], expected: Path) -> None:
    assert user_config_dir(environ) == expected


def test_user_config_dir_without_home() -> None:
    with pytest.raises(MissingHomeConfigError):
        user_config_dir({})


def test_config_paths_discover() -> None:
    paths = ConfigPaths.discover(Path("/etc/battray"), {"HOME": "/home/u"})

    assert paths.system_themes == Path("/etc/battray/themes.conf")
    assert paths.system_script == Path("/etc/battray/rc.py")
    assert paths.user_themes == Path("/home/u/.config/battray/themes.conf")
    assert paths.user_script == Path("/home/u/.config/battray/rc.py")
