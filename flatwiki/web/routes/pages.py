"""
Page routes — index, view, edit, save.

All routes accept any HTTP method. Page ids are constrained by the path
allow-list, so a request only reaches these handlers with a valid id.
"""

import asyncio
from urllib.parse import parse_qsl

from aiohttp import web

from flatwiki.journal import journal
from flatwiki.page_store import Page
from flatwiki.web.paths import INDEX_PATHS, page_url, route_path
from flatwiki.web.render import render_page, server_error

routes = web.RouteTableDef()

INDEX_PAGE = Page(title="Index", body=b"Hello World")
MISSING_PAGE_BODY = b"Page doesn't exist.  Opened edit screen for editing."


async def _load(request: web.Request, page_id: str) -> Page | None:
    """Load a page off the event loop; any read failure means absent."""
    store = request.app["page_store"]
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(None, store.load, page_id)
    except OSError as e:
        journal.page_missing(page_id, e.strerror or str(e))
        return None


def _raw_values(query: str) -> dict[str, bytes]:
    """Decode a urlencoded string to raw bytes per key (first value wins).

    latin-1 maps every byte to one code point, so percent-escapes that are
    not valid UTF-8 survive unchanged.
    """
    values: dict[str, bytes] = {}
    for key, value in parse_qsl(query, keep_blank_values=True, encoding="latin-1"):
        values.setdefault(key, value.encode("latin-1"))
    return values


async def _form_value(request: web.Request, name: str) -> bytes | None:
    """Form field as raw bytes: posted body first, then the query string."""
    if request.content_type == "application/x-www-form-urlencoded":
        raw = await request.read()
        value = _raw_values(raw.decode("latin-1")).get(name)
        if value is not None:
            return value
    elif request.content_type.startswith("multipart/"):
        form = await request.post()
        field = form.get(name)
        if isinstance(field, web.FileField):
            return field.file.read()
        if field is not None:
            return str(field).encode("utf-8")
    return _raw_values(request.rel_url.raw_query_string).get(name)


async def index(request: web.Request) -> web.Response:
    """Static greeting page."""
    return render_page(request, "index", INDEX_PAGE)


for _path in INDEX_PATHS:
    routes.route("*", _path)(index)


@routes.route("*", route_path("view"))
async def view_page(request: web.Request) -> web.Response:
    """Show a page, or send the user to create it."""
    page_id = request.match_info["page_id"]
    page = await _load(request, page_id)
    if page is None:
        raise web.HTTPFound(page_url("edit", page_id))
    return render_page(request, "view", page)


@routes.route("*", route_path("edit"))
async def edit_page(request: web.Request) -> web.Response:
    """Edit form, pre-filled with the stored body or a placeholder."""
    page_id = request.match_info["page_id"]
    page = await _load(request, page_id)
    if page is None:
        page = Page(title=page_id, body=MISSING_PAGE_BODY)
    return render_page(request, "edit", page)


@routes.route("*", route_path("save"))
async def save_page(request: web.Request) -> web.Response:
    """Persist the submitted body and redirect to the page view."""
    page_id = request.match_info["page_id"]
    store = request.app["page_store"]

    # A missing field saves an empty page
    body = await _form_value(request, "body")
    page = Page(title=page_id, body=body or b"")

    loop = asyncio.get_running_loop()
    try:
        await loop.run_in_executor(None, store.save, page)
    except OSError as e:
        journal.save_error(page_id, str(e))
        return server_error(str(e))

    journal.page_saved(page_id, len(page.body))
    raise web.HTTPFound(page_url("view", page_id))
