#!/usr/bin/env python3
"""
Flatwiki Service

Main entry point: seeds the sample page, then serves the wiki until
interrupted. Exits with status 1 if the listen address cannot be bound.
"""

import asyncio
import logging
import signal
import sys
from pathlib import Path

from flatwiki.config import WikiConfig
from flatwiki.journal import journal
from flatwiki.page_store import PageStore
from flatwiki.web.server import WikiServer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("flatwiki")

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def main() -> None:
    """Main application entry point."""
    config = WikiConfig.load()

    log_file = Path(config.logging.file) if config.logging.file else None
    journal.configure(log_file=log_file, console=True)
    journal.start(config.site_name)

    store = PageStore(Path(config.storage.root), config.storage.extension)
    logger.info(f"Page store: {store.root} (*{store.extension})")

    # Always overwritten at startup
    if store.seed(config.seed.title, config.seed.body.encode("utf-8")):
        journal.seeded(config.seed.title, store.path_for(config.seed.title))

    server = WikiServer(
        page_store=store,
        templates_dir=config.templates_dir,
        site_name=config.site_name,
        host=config.server.host,
        port=config.server.port,
        client_max_size=config.server.max_body_bytes,
    )

    shutdown_event = asyncio.Event()

    def handle_shutdown(sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, initiating shutdown...")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in SHUTDOWN_SIGNALS:
        loop.add_signal_handler(sig, handle_shutdown, sig)

    try:
        try:
            await server.start()
        except OSError as e:
            journal.error(f"Cannot listen on {config.server.host}:{config.server.port}: {e}")
            sys.exit(1)

        journal.listening(config.server.port)
        try:
            await shutdown_event.wait()
        finally:
            await server.stop()
            journal.stop(config.site_name)
    finally:
        for sig in SHUTDOWN_SIGNALS:
            loop.remove_signal_handler(sig)


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
