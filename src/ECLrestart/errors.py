"""Errors raised while reading restart files."""
from __future__ import annotations

__all__ = [
    "RestartError",
    "FileOpenError",
    "ReportStepNotFoundError",
    "MissingKeywordError",
    "SizeMismatchError",
]


class RestartError(Exception):
    """Base class for all restart read failures."""


class FileOpenError(RestartError, OSError):
    """The restart file does not exist or cannot be opened."""

    def __init__(self, path, reason: str = "not found"):
        self.path = path
        self.reason = reason
        super().__init__(f"Restart file {path} {reason}")

    def __str__(self):
        return self.args[0]


class ReportStepNotFoundError(RestartError, LookupError):
    """A unified restart file has no block for the requested report step."""

    def __init__(self, path, report_step: int):
        self.path = path
        self.report_step = report_step
        super().__init__(f"Restart file {path} does not contain data for report step {report_step}")


class MissingKeywordError(RestartError, KeyError):
    """A required record is absent from the restart file."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Restart file does not contain {self.name} data"


class SizeMismatchError(RestartError, ValueError):
    """The length of a record disagrees with the expected geometry."""

    def __init__(self, name: str, expected: int, actual: int):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(name, expected, actual)

    def __str__(self):
        return (f"Could not restore {self.name}: expected {self.expected} "
                f"values, found {self.actual}")
