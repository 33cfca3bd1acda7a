"""
Flatwiki Page Store

One file per page under a storage root:
- <root>/<title><extension> holds the raw page body
- Files are created owner read/write only (0600)

Nothing is cached. Every load reads the disk, every save overwrites it.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

SEED_TITLE = "TestPage"
SEED_BODY = b"This is a sample Page."


@dataclass
class Page:
    """A wiki page: title plus raw body bytes."""
    title: str
    body: bytes

    @property
    def text(self) -> str:
        """Body decoded for display."""
        return self.body.decode("utf-8", errors="replace")


class PageStore:
    """
    File-backed page storage.

    Usage:
        store = PageStore(Path("./created-pages"))
        store.save(Page("Home", b"Welcome"))
        page = store.load("Home")

    The storage root must already exist. Any OSError from the filesystem
    propagates to the caller.
    """

    def __init__(self, root: Path, extension: str = ".html"):
        self.root = Path(root)
        self.extension = extension

    def path_for(self, title: str) -> Path:
        """File path for a page title (title used verbatim)."""
        return self.root / f"{title}{self.extension}"

    def load(self, title: str) -> Page:
        """Read a page from disk. Raises OSError if missing or unreadable."""
        body = self.path_for(title).read_bytes()
        return Page(title=title, body=body)

    def save(self, page: Page) -> None:
        """Write a page to disk, creating or truncating its file."""
        fd = os.open(
            self.path_for(page.title),
            os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
            0o600,
        )
        with os.fdopen(fd, "wb") as f:
            f.write(page.body)
        logger.debug(f"Saved page {page.title} ({len(page.body)} bytes)")

    def seed(self, title: str = SEED_TITLE, body: bytes = SEED_BODY) -> bool:
        """Unconditionally (over)write the sample page.

        Returns False instead of raising when the write fails, so a missing
        storage root does not stop the server from starting.
        """
        try:
            self.save(Page(title=title, body=body))
        except OSError as e:
            logger.warning(f"Could not seed page {title}: {e}")
            return False
        return True
