"""Flatwiki Web Package."""

from flatwiki.web.server import WikiServer, create_app

__all__ = ["WikiServer", "create_app"]
