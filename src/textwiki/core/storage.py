"""Page storage backed by plain-text files."""

import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from textwiki.core.errors import InvalidTitle, PageNotFound, StorageError
from textwiki.core.models import Page

logger = logging.getLogger(__name__)

TITLE_PATTERN = re.compile(r"[a-zA-Z0-9 \t\n\f\r]+")


def validate_title(title: str) -> str:
    """Return the title unchanged, or raise InvalidTitle."""
    if not title:
        raise InvalidTitle(title, "Title is required")
    if TITLE_PATTERN.fullmatch(title) is None:
        raise InvalidTitle(title, "Title may only contain letters, digits and spaces")
    return title


def display_name(title: str) -> str:
    """Name shown for a page in the index.

    Currently the stored title itself.
    """
    return title


class PageStore(ABC):
    """Abstract base class for page storage."""

    @abstractmethod
    async def load(self, title: str) -> Page:
        """Read a page. Raises PageNotFound if it does not exist."""
        ...

    @abstractmethod
    async def save(self, page: Page) -> None:
        """Write a page, creating or overwriting it."""
        ...

    @abstractmethod
    def rebuild_index(self) -> None:
        """Rescan storage and replace the title index."""
        ...

    @property
    @abstractmethod
    def index(self) -> Mapping[str, str]:
        """Snapshot of title -> display name as of the last rebuild."""
        ...


class FilePageStore(PageStore):
    """File-based storage implementation.

    Each page lives in ``<data_dir>/<title><suffix>`` and holds the raw body.
    Writes are not atomic.
    """

    def __init__(self, base_path: Path, suffix: str = ".txt"):
        self.base_path = base_path
        self.suffix = suffix
        self.base_path.mkdir(parents=True, exist_ok=True)
        self._index: Mapping[str, str] = MappingProxyType({})

    def path_for(self, title: str) -> Path:
        """Get full path for a page."""
        return self.base_path / (title + self.suffix)

    async def load(self, title: str) -> Page:
        path = self.path_for(title)
        try:
            body = path.read_bytes()
        except FileNotFoundError as exc:
            raise PageNotFound(title) from exc
        except OSError as exc:
            logger.error("Failed to read page %r from %s: %s", title, path, exc)
            raise StorageError(title, exc) from exc
        return Page(title=title, body=body)

    async def save(self, page: Page) -> None:
        path = self.path_for(page.title)
        try:
            path.write_bytes(page.body)
            path.chmod(0o600)
        except OSError as exc:
            logger.error("Failed to write page %r to %s: %s", page.title, path, exc)
            raise StorageError(page.title, exc) from exc
        logger.debug("Saved page %r (%d bytes)", page.title, len(page.body))

    def rebuild_index(self) -> None:
        """Rescan the data directory.

        A listing failure is logged and leaves the previous index in place.
        """
        try:
            entries = [p for p in self.base_path.iterdir() if p.is_file()]
        except OSError as exc:
            logger.error("Failed to list %s: %s", self.base_path, exc)
            return

        index = {}
        for path in entries:
            title = path.stem
            index[title] = display_name(title)

        self._index = MappingProxyType(index)
        logger.info("Indexed %d pages in %s", len(index), self.base_path)

    @property
    def index(self) -> Mapping[str, str]:
        return self._index
