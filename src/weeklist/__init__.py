"""Weeklist - a personal weekday/weekend task list bot for Telegram."""

__version__ = "0.1.0"
