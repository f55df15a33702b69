# errors.py
# Exceptions raised outside the parsing core (configuration, Google Sheets I/O).


class CrewRosterError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(CrewRosterError):
    """Missing or invalid settings / credentials."""


class SheetsError(CrewRosterError):
    """A Google Sheets request failed."""
