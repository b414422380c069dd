"""Satis manifest handling.

Keeps the ``repositories`` section of a Satis configuration in sync with
the repositories perseus has mirrored, without touching any other key.
"""

from .base import (
    ConfigProvider,
    SatisRepository,
    DEFAULT_FILE_MODE,
    DEFAULT_REPOSITORY_TYPE,
    REPOSITORIES_KEY,
)
from .exceptions import (
    SatisError,
    InvalidArgumentError,
    MalformedDataError,
    SerializationError,
    ManifestWriteError,
)
from .provider import JsonFileProvider
from .registry import Satis

__all__ = [
    "ConfigProvider",
    "SatisRepository",
    "DEFAULT_FILE_MODE",
    "DEFAULT_REPOSITORY_TYPE",
    "REPOSITORIES_KEY",
    "SatisError",
    "InvalidArgumentError",
    "MalformedDataError",
    "SerializationError",
    "ManifestWriteError",
    "JsonFileProvider",
    "Satis",
]
