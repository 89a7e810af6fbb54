"""
Errors raised while reading DRM files.
"""


class DrmError(Exception):
    """Base exception for DRM reading errors."""


class FormatError(DrmError, ValueError):
    """Malformed DRM input."""


class CoordinateLengthError(FormatError):
    """Coordinate text is not exactly 10 characters long."""


class RecordTagError(FormatError):
    """Line was given to the decoder of another record kind."""


class FieldValueError(FormatError):
    """Fixed-position field is missing or cannot be decoded."""
