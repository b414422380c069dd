"""Data structures and protocols shared by the Satis manifest code.

Satis (https://github.com/composer/satis) builds a static Composer
repository from a JSON file. Its schema is large and keeps growing, so
perseus never models it as a whole: only the ``repositories`` section is
parsed, every other top-level key is carried through as an opaque value.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Protocol

from ..common.config import DEFAULT_FILE_MODE
from .exceptions import MalformedDataError

REPOSITORIES_KEY = "repositories"
DEFAULT_REPOSITORY_TYPE = "git"
JSON_INDENT = 4


@dataclass
class SatisRepository:
    """A single entry of the Satis ``repositories`` section.

    ``url`` is the identity of the entry; ``type`` is the repository
    mechanism (``git``, ``svn``, ``vcs``...) and is kept as loaded.
    """

    type: str
    url: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to the manifest's ``{"type", "url"}`` shape."""
        return {"type": self.type, "url": self.url}

    @classmethod
    def from_dict(cls, data: Any) -> "SatisRepository":
        """Build an entry from one element of the ``repositories`` array.

        Missing fields default to an empty string and unknown fields are
        dropped.

        Args:
            data: Decoded JSON value of the array element

        Returns:
            SatisRepository instance

        Raises:
            MalformedDataError: If the element is not an object or a
                field is not a string
        """
        if not isinstance(data, Mapping):
            raise MalformedDataError(
                f"Repository entry must be an object, got {type(data).__name__}"
            )

        values = {}
        for name in ("type", "url"):
            value = data.get(name)
            if value is None:
                value = ""
            elif not isinstance(value, str):
                raise MalformedDataError(
                    f"Repository field '{name}' must be a string, "
                    f"got {type(value).__name__}"
                )
            values[name] = value

        return cls(type=values["type"], url=values["url"])


class ConfigProvider(Protocol):
    """Read-only view of an already loaded configuration document.

    Values are the decoded JSON value of each top-level key and are
    handed back for re-serialization untouched.
    """

    def get(self, key: str) -> Optional[Any]: ...

    def get_content_map(self) -> Dict[str, Any]: ...
