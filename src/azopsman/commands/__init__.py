"""Command modules for azopsman."""

from . import backup, profile, trigger

__all__ = ["backup", "profile", "trigger"]
