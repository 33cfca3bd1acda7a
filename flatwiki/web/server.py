"""
Flatwiki Web Server

aiohttp application serving the wiki pages through Jinja2 templates.
"""

import logging
from pathlib import Path

import aiohttp_jinja2
import jinja2
from aiohttp import web

from flatwiki.config import DEFAULT_MAX_BODY_BYTES
from flatwiki.journal import journal
from flatwiki.page_store import PageStore
from flatwiki.web.render import escape_text

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


@web.middleware
async def request_journal(request: web.Request, handler) -> web.StreamResponse:
    """Log every inbound request line, matched or not."""
    journal.request(request.method, request.path)
    return await handler(request)


def create_app(
    page_store: PageStore,
    templates_dir: Path = TEMPLATES_DIR,
    site_name: str = "flatwiki",
    client_max_size: int = DEFAULT_MAX_BODY_BYTES,
) -> web.Application:
    """Build the wiki application around a page store and template dir."""
    app = web.Application(
        middlewares=[request_journal],
        client_max_size=client_max_size,
    )
    app["page_store"] = page_store

    env = aiohttp_jinja2.setup(
        app,
        loader=jinja2.FileSystemLoader(str(templates_dir)),
        autoescape=jinja2.select_autoescape(["html"]),
        undefined=jinja2.StrictUndefined,
    )
    env.globals["site_name"] = site_name
    env.filters["text"] = escape_text

    from flatwiki.web.routes.pages import routes as page_routes
    app.router.add_routes(page_routes)
    return app


class WikiServer:
    """Runs the wiki application on a TCP port."""

    def __init__(
        self,
        page_store: PageStore,
        templates_dir: Path = TEMPLATES_DIR,
        site_name: str = "flatwiki",
        host: str = "0.0.0.0",
        port: int = 8080,
        client_max_size: int = DEFAULT_MAX_BODY_BYTES,
    ):
        self.page_store = page_store
        self.host = host
        self.port = port
        self.app = create_app(page_store, templates_dir, site_name, client_max_size)
        self._runner: web.AppRunner | None = None

    async def start(self) -> None:
        """Start listening. Raises OSError if the port cannot be bound."""
        self._runner = web.AppRunner(self.app, access_log=None)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.host, self.port)
        try:
            await site.start()
        except OSError:
            await self._runner.cleanup()
            self._runner = None
            raise
        logger.info(f"Wiki started at http://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop the web server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            logger.info("Wiki stopped")
