"""
Flatwiki Journal

Console log of what the wiki is doing, one line per event:
- ➡️ REQ: every inbound request line
- 💾 SAVE: page written to disk
- ❓ MISSING: page looked up but not on disk
- ❌ SAVE.ERR / RENDER.ERR: failures surfaced as 500s
- 🌱 SEED: sample page written at startup
"""

import logging
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path


class Event(Enum):
    """Event types for the journal."""
    REQUEST = "➡️ REQ"

    PAGE_SAVED = "💾 SAVE"
    PAGE_MISSING = "❓ MISSING"
    SAVE_ERROR = "❌ SAVE.ERR"
    RENDER_ERROR = "❌ RENDER.ERR"

    SEED = "🌱 SEED"

    SYSTEM_START = "⚡ START"
    SYSTEM_STOP = "⚡ STOP"
    SYSTEM_ERROR = "❌ ERROR"


class JournalFormatter(logging.Formatter):
    """Short single-line format: time, event tag, message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")

        event = getattr(record, 'event', None)
        if event:
            prefix = event.value
        else:
            prefix = f"[{record.levelname}]"

        return f"{timestamp} {prefix} │ {record.getMessage()}"


class WikiJournal:
    """
    Central event logger for flatwiki.

    Usage:
        from flatwiki.journal import journal

        journal.request("GET", "/view/Home")
        journal.page_saved("Home", 42)
    """

    def __init__(self, name: str = "flatwiki.journal"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)
        self._configured = False

    def configure(self, log_file: Path | None = None, console: bool = True) -> None:
        """Configure journal outputs."""
        if self._configured:
            return

        formatter = JournalFormatter()

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if log_file:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

        # Don't propagate to root logger (avoid duplicate output)
        self.logger.propagate = False
        self._configured = True

    def _log(self, event: Event, message: str, level: int = logging.INFO) -> None:
        if not self._configured:
            self.configure()
        self.logger.log(level, message, extra={'event': event})

    # === Requests ===

    def request(self, method: str, path: str) -> None:
        """Log an inbound request line."""
        self._log(Event.REQUEST, f"[{method}] - {path}")

    # === Pages ===

    def page_saved(self, title: str, size: int) -> None:
        self._log(Event.PAGE_SAVED, f"{title} ({size} bytes)")

    def page_missing(self, title: str, error: str) -> None:
        self._log(Event.PAGE_MISSING, f"{title}: {error}")

    def save_error(self, title: str, error: str) -> None:
        self._log(Event.SAVE_ERROR, f"{title}: {error}", logging.ERROR)

    def render_error(self, template: str, error: str) -> None:
        self._log(Event.RENDER_ERROR, f"{template}: {error}", logging.ERROR)

    def seeded(self, title: str, path: Path) -> None:
        self._log(Event.SEED, f"{title} → {path}")

    # === System ===

    def start(self, component: str) -> None:
        """Log component started."""
        self._log(Event.SYSTEM_START, component)

    def listening(self, port: int) -> None:
        """Log the server accepting connections."""
        self._log(Event.SYSTEM_START, f"Listening on port {port}")

    def stop(self, component: str) -> None:
        """Log component stopped."""
        self._log(Event.SYSTEM_STOP, component)

    def error(self, message: str) -> None:
        """Log system error."""
        self._log(Event.SYSTEM_ERROR, message, logging.ERROR)


# Global journal instance
journal = WikiJournal()
