"""
Wiki path allow-list.

Only these request paths reach a handler:
- /  and  /index             → index
- /{edit|save|view}/{id}     → page action, id is ASCII letters and digits

Everything else is a 404 from the aiohttp router. No trailing-slash, case or
encoding normalization.
"""

import re

ACTIONS = ("edit", "save", "view")
INDEX_PATHS = ("/", "/index")
PAGE_ID_PATTERN = "[a-zA-Z0-9]+"


def is_valid_page_id(page_id: str) -> bool:
    return re.fullmatch(PAGE_ID_PATTERN, page_id) is not None


def route_path(action: str) -> str:
    """aiohttp route pattern for a page action, e.g. /view/{page_id:...}."""
    if action not in ACTIONS:
        raise ValueError(f"Unknown page action: {action}")
    return f"/{action}/{{page_id:{PAGE_ID_PATTERN}}}"


def page_url(action: str, page_id: str) -> str:
    """Build the URL for a page action. Rejects ids outside the allow-list."""
    if action not in ACTIONS:
        raise ValueError(f"Unknown page action: {action}")
    if not is_valid_page_id(page_id):
        raise ValueError(f"Invalid page id: {page_id!r}")
    return f"/{action}/{page_id}"
