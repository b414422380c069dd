"""Satis repository registry and manifest writer.

The registry owns the ``repositories`` section of a Satis file. It is
seeded from a configuration provider, grows as packages are mirrored,
and is written back with every other top-level key left as it was.

The registry does no locking. Concurrent mirror workers must funnel
their ``add_repository`` calls through a single thread.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

from ..common.logger import get_logger
from .base import (
    ConfigProvider,
    SatisRepository,
    DEFAULT_FILE_MODE,
    DEFAULT_REPOSITORY_TYPE,
    JSON_INDENT,
    REPOSITORIES_KEY,
)
from .exceptions import (
    InvalidArgumentError,
    MalformedDataError,
    ManifestWriteError,
    SerializationError,
)
from .provider import JsonFileProvider

logger = get_logger("satis")


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class Satis:
    """A Satis configuration with a deduplicated repository list.

    Entries are keyed by URL. Adding a URL that is already known replaces
    the entry, so every URL appears exactly once in the written file.
    """

    def __init__(self, provider: ConfigProvider):
        """Create the registry from an already loaded provider.

        Args:
            provider: Source of the current Satis document

        Raises:
            InvalidArgumentError: If no usable provider is given
            MalformedDataError: If the stored ``repositories`` value is
                not an array of repository objects
        """
        if provider is None:
            raise InvalidArgumentError("No configuration provider given")
        if not callable(getattr(provider, "get", None)) or not callable(
            getattr(provider, "get_content_map", None)
        ):
            raise InvalidArgumentError(
                f"Configuration provider {type(provider).__name__} does not "
                f"implement get() and get_content_map()"
            )

        self._provider = provider
        self._repositories: Dict[str, SatisRepository] = {}

        for repository in self._load_repositories(provider.get(REPOSITORIES_KEY)):
            # Later duplicates replace earlier ones
            self._repositories[repository.url] = repository

        logger.info(f"Loaded {len(self._repositories)} repositories from Satis config")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Satis":
        """Load a Satis JSON file and build a registry from it.

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedDataError: If the file content is malformed
        """
        return cls(JsonFileProvider.from_file(path))

    @staticmethod
    def _load_repositories(raw: Any) -> List[SatisRepository]:
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise MalformedDataError(
                f"'{REPOSITORIES_KEY}' must be an array, got {type(raw).__name__}"
            )

        repositories = []
        for index, item in enumerate(raw):
            try:
                repositories.append(SatisRepository.from_dict(item))
            except MalformedDataError as e:
                raise MalformedDataError(
                    f"Invalid entry {index} in '{REPOSITORIES_KEY}': {e}"
                ) from e
        return repositories

    def add_repository(self, url: str, repo_type: str = DEFAULT_REPOSITORY_TYPE) -> None:
        """Add repository url, replacing any entry with the same URL.

        Args:
            url: Repository URL, treated as an opaque identifier
            repo_type: Repository type written to the manifest

        Raises:
            InvalidArgumentError: If url is empty or not a string
        """
        if not isinstance(url, str) or not url:
            raise InvalidArgumentError(f"Repository URL must be a non-empty string: {url!r}")

        if url in self._repositories:
            logger.debug(f"Repository already known, updating: {url}")
        else:
            logger.debug(f"Adding repository: {url}")
        self._repositories[url] = SatisRepository(type=repo_type, url=url)

    def add_repositories(self, *urls: str) -> None:
        """Add each of urls in order."""
        for url in urls:
            self.add_repository(url)

    def has_repository(self, url: str) -> bool:
        """Check whether url is part of the registry."""
        return url in self._repositories

    def get_repositories_as_list(self) -> List[SatisRepository]:
        """Return all repositories sorted by URL.

        Returns:
            List of SatisRepository, ascending by URL
        """
        return sorted(self._repositories.values(), key=lambda r: r.url)

    def render(self) -> str:
        """Render the complete Satis document as JSON text.

        Every top-level key of the provider is kept in its original
        position; only ``repositories`` is replaced by the registry's
        current content.

        Returns:
            The document, newline terminated

        Raises:
            SerializationError: If a value cannot be encoded as JSON
        """
        content = dict(self._provider.get_content_map())
        content[REPOSITORIES_KEY] = [r.to_dict() for r in self.get_repositories_as_list()]

        try:
            text = json.dumps(
                content, indent=JSON_INDENT, ensure_ascii=False, allow_nan=False
            )
            try:
                text.encode("utf-8")
            except UnicodeEncodeError:
                # Lone surrogates from \uXXXX escapes only survive as escapes
                text = json.dumps(
                    content, indent=JSON_INDENT, ensure_ascii=True, allow_nan=False
                )
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Could not encode Satis config: {e}") from e

        return text + "\n"

    def write_file(self, filename: Union[str, Path], perm: int = DEFAULT_FILE_MODE) -> None:
        """Write the Satis configuration to filename with permissions perm.

        The document is rendered in full before the filesystem is touched,
        then written to a temporary file next to filename and renamed over
        it. A failed write leaves any existing file unchanged.

        Args:
            filename: Target path
            perm: Permission bits of the written file

        Raises:
            SerializationError: If the document cannot be encoded
            ManifestWriteError: If the file cannot be written
        """
        try:
            data = self.render().encode("utf-8")
        except UnicodeEncodeError as e:
            raise SerializationError(f"Could not encode Satis config: {e}") from e
        target = Path(filename)

        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
        except OSError as e:
            raise ManifestWriteError(f"Could not write Satis config {target}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            os.chmod(tmp_name, perm)
            os.replace(tmp_name, target)
        except OSError as e:
            _discard(tmp_name)
            raise ManifestWriteError(f"Could not write Satis config {target}: {e}") from e
        except BaseException:
            _discard(tmp_name)
            raise

        logger.info(
            f"Wrote {len(self._repositories)} repositories to {target} "
            f"(mode {perm:o})"
        )

    def __len__(self) -> int:
        return len(self._repositories)

    def __contains__(self, url: object) -> bool:
        return url in self._repositories

    def __iter__(self) -> Iterator[SatisRepository]:
        return iter(self.get_repositories_as_list())
