"""
Template rendering for page actions.

Each action has a template named <action>.html rendered with the page bound
as ``page``. Any jinja2 failure becomes a plain-text 500 carrying the error
message.
"""

import html

import aiohttp_jinja2
import jinja2
from aiohttp import web
from markupsafe import Markup

from flatwiki.journal import journal
from flatwiki.page_store import Page


def server_error(message: str) -> web.Response:
    """500 response whose body is the raw error text."""
    return web.Response(status=500, text=message, content_type="text/plain")


def render_page(request: web.Request, action: str, page: Page) -> web.Response:
    """Render ``<action>.html`` with ``page``; 500 on any template error."""
    template_name = f"{action}.html"
    env = aiohttp_jinja2.get_env(request.app)
    try:
        template = env.get_template(template_name)
        rendered = template.render(page=page)
    except jinja2.TemplateError as e:
        journal.render_error(template_name, str(e))
        return server_error(str(e))
    return web.Response(text=rendered, content_type="text/html")


def escape_text(value: str) -> Markup:
    """Escape for an element's text content (quotes left readable)."""
    return Markup(html.escape(value, quote=False))
