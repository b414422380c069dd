"""JSON file backed configuration provider for Satis manifests."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..common.logger import get_logger
from .exceptions import MalformedDataError

logger = get_logger("satis.provider")


class JsonFileProvider:
    """Holds the top-level keys of a Satis JSON document.

    Each value is kept as decoded from the file and never interpreted,
    so keys perseus knows nothing about survive a rewrite.
    """

    def __init__(self, content: Optional[Dict[str, Any]] = None):
        """Initialize provider.

        Args:
            content: Top-level mapping of the document
        """
        self._content: Dict[str, Any] = dict(content or {})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "JsonFileProvider":
        """Load a provider from a Satis JSON file.

        An empty file is treated as an empty document.

        Args:
            path: Path to the JSON file

        Returns:
            JsonFileProvider instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedDataError: If the file is not a UTF-8 encoded JSON object
        """
        satis_file = Path(path)
        if not satis_file.exists():
            raise FileNotFoundError(f"Satis file not found: {path}")

        try:
            text = satis_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDataError(f"Invalid UTF-8 in {path}: {e}") from e

        if not text.strip():
            logger.debug(f"Satis file {path} is empty")
            return cls()

        try:
            content = json.loads(text)
        except json.JSONDecodeError as e:
            raise MalformedDataError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(content, dict):
            raise MalformedDataError(
                f"Satis file root must be an object, got {type(content).__name__}"
            )

        logger.debug(f"Loaded {len(content)} keys from {path}")
        return cls(content)

    def get(self, key: str) -> Optional[Any]:
        """Return the raw value stored under key, or None if absent."""
        return self._content.get(key)

    def get_content_map(self) -> Dict[str, Any]:
        """Return a snapshot of every top-level key and its raw value."""
        return dict(self._content)
