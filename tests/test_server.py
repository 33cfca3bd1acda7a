"""Tests for WikiServer lifecycle and the process entry point."""

import asyncio
import signal
import socket

import aiohttp
import pytest

from flatwiki.main import main
from flatwiki.web.server import WikiServer


@pytest.fixture
def busy_port():
    """A loopback port that is already bound and listening."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    yield sock.getsockname()[1]
    sock.close()


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


async def test_server_serves_over_tcp(page_store):
    port = _free_port()
    server = WikiServer(page_store, host="127.0.0.1", port=port)
    await server.start()
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(f"http://127.0.0.1:{port}/") as resp:
                assert resp.status == 200
                assert "Hello World" in await resp.text()
    finally:
        await server.stop()


async def test_server_start_fails_on_bound_port(page_store, busy_port):
    server = WikiServer(page_store, host="127.0.0.1", port=busy_port)

    with pytest.raises(OSError):
        await server.start()


async def test_main_seeds_then_exits_when_port_is_taken(tmp_path, monkeypatch, busy_port):
    pages = tmp_path / "pages"
    pages.mkdir()
    (pages / "TestPage.html").write_bytes(b"stale")
    monkeypatch.setenv("FLATWIKI_CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("FLATWIKI_HOST", "127.0.0.1")
    monkeypatch.setenv("FLATWIKI_PORT", str(busy_port))
    monkeypatch.setenv("FLATWIKI_STORAGE_ROOT", str(pages))
    monkeypatch.delenv("FLATWIKI_PAGE_EXTENSION", raising=False)
    monkeypatch.delenv("FLATWIKI_LOG_FILE", raising=False)

    with pytest.raises(SystemExit) as exc_info:
        await main()

    assert exc_info.value.code == 1
    assert (pages / "TestPage.html").read_bytes() == b"This is a sample Page."
    # Shutdown handlers are removed again on exit
    loop = asyncio.get_running_loop()
    assert loop.remove_signal_handler(signal.SIGINT) is False
    assert loop.remove_signal_handler(signal.SIGTERM) is False
