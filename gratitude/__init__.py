"""Gratitude - a command-line journal for three good things a day."""

__version__ = "0.1.0"
