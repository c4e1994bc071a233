# Example battray script, installed as ~/.config/battray/rc.py.
# The `battray` object is provided by the notifier when the script runs.

battray.set_event("default", 0, battray.command("systemctl suspend"), "discharging")  # noqa: F821
