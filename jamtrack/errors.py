from __future__ import annotations


class JamTrackError(Exception):
    """Base error for the jamtrack library."""


class UnknownKeyError(JamTrackError):
    """Raised when a key name does not match any pitch class."""

    def __init__(self, name: str, accepted: str = "") -> None:
        self.name = name
        message = f"Invalid key: {name!r}"
        if accepted:
            message = f"{message}. Valid: {accepted}"
        super().__init__(message)


class UnknownModeError(JamTrackError):
    """Raised when a mode name does not match any of the seven modes."""

    def __init__(self, name: str, accepted: str = "") -> None:
        self.name = name
        message = f"Invalid mode: {name!r}"
        if accepted:
            message = f"{message}. Valid: {accepted}"
        super().__init__(message)


class InvalidConfigError(JamTrackError):
    """Raised when a config or progression cannot be used as given."""


class InvalidSynthParamsError(JamTrackError):
    """Raised for negative, non-finite or otherwise degenerate timing values."""


class EmptyAudioError(JamTrackError):
    """Raised when an operation needs at least one sample."""
