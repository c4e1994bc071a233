"""Battery tray notifier with themeable, step-based icons."""

__version__ = "0.1.0"
