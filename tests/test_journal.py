"""Tests for the journal log format."""

import logging

from flatwiki.journal import Event, JournalFormatter, WikiJournal


def _record(message: str, event: Event | None = None, level: int = logging.INFO) -> logging.LogRecord:
    record = logging.LogRecord("flatwiki.journal", level, __file__, 1, message, None, None)
    if event is not None:
        record.event = event
    return record


def test_formatter_uses_event_tag():
    line = JournalFormatter().format(_record("[GET] - /view/Foo", Event.REQUEST))

    assert line.endswith(f"{Event.REQUEST.value} │ [GET] - /view/Foo")


def test_formatter_falls_back_to_level_name():
    line = JournalFormatter().format(_record("plain", level=logging.WARNING))

    assert line.endswith("[WARNING] │ plain")


def test_request_line(journal_records):
    from flatwiki.journal import journal

    journal.request("POST", "/save/Foo")

    assert journal_records[-1].getMessage() == "[POST] - /save/Foo"
    assert journal_records[-1].event is Event.REQUEST


def test_listening_line(journal_records):
    from flatwiki.journal import journal

    journal.listening(8080)

    assert journal_records[-1].getMessage() == "Listening on port 8080"
    assert journal_records[-1].event is Event.SYSTEM_START


def test_log_file_receives_journal_lines(tmp_path):
    log_file = tmp_path / "logs" / "wiki.log"
    wiki_journal = WikiJournal(name="flatwiki.journal.file-test")
    wiki_journal.configure(log_file=log_file, console=False)
    try:
        wiki_journal.request("GET", "/view/Foo")
    finally:
        for handler in list(wiki_journal.logger.handlers):
            handler.close()
            wiki_journal.logger.removeHandler(handler)

    assert log_file.read_text(encoding="utf-8").rstrip().endswith("│ [GET] - /view/Foo")
