"""Errors raised while loading or writing a Satis manifest."""


class SatisError(Exception):
    """Base class for all Satis manifest errors."""


class InvalidArgumentError(SatisError, ValueError):
    """A required argument is missing or unusable."""


class MalformedDataError(SatisError, ValueError):
    """Manifest content does not have the expected shape.

    Raised instead of silently dropping data, so the manifest has to be
    fixed by hand.
    """


class SerializationError(SatisError):
    """In-memory manifest data cannot be encoded as JSON."""


class ManifestWriteError(SatisError, OSError):
    """The manifest could not be written to disk."""
