"""Medhelp: guided meditation audio assembly and batch renaming."""

__version__ = "0.1.0"
