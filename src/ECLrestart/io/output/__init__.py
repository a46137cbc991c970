"""Restart file readers for ECLrestart."""

from .restart_files import Record, RestartLocator, RST_file

__all__ = ["Record", "RestartLocator", "RST_file"]
