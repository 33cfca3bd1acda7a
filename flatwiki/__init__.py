"""Flatwiki: file-backed wiki pages served over HTTP."""

from flatwiki.page_store import Page, PageStore

__all__ = ["Page", "PageStore"]
