"""Conversation record exceptions."""


class RecordError(Exception):
    """Base class for conversation record errors."""


class RecordValidationError(RecordError):
    """Record failed schema or version validation."""


class RecordChecksumError(RecordError):
    """Record checksum mismatch."""
