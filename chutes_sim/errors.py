"""Named failures raised before any simulation runs."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """A run was configured with values the simulator cannot use."""


class BoardFormatError(ConfigurationError):
    """A board file could not be parsed."""

    def __init__(self, source: str, line_number: int, message: str):
        self.source = source
        self.line_number = line_number
        super().__init__(f"{source}:{line_number}: {message}")
