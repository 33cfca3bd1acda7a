"""Shared fixtures for flatwiki tests."""

import logging
from pathlib import Path

import pytest

from flatwiki.journal import journal
from flatwiki.page_store import PageStore
from flatwiki.web.server import TEMPLATES_DIR, create_app


@pytest.fixture
def storage_root(tmp_path) -> Path:
    """Empty, existing storage directory per test."""
    root = tmp_path / "pages"
    root.mkdir()
    return root


@pytest.fixture
def page_store(storage_root):
    return PageStore(storage_root, ".html")


@pytest.fixture
def wiki_app(page_store):
    """Wiki app wired to a temporary page store and the bundled templates."""
    return create_app(page_store, TEMPLATES_DIR)


@pytest.fixture
async def client(aiohttp_client, wiki_app):
    """aiohttp test client for the wiki app."""
    return await aiohttp_client(wiki_app)


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@pytest.fixture
def journal_records():
    """Collect journal records (the journal does not propagate to root)."""
    handler = _ListHandler()
    journal.logger.addHandler(handler)
    yield handler.records
    journal.logger.removeHandler(handler)
