from __future__ import annotations

import io
import logging
import threading

import pytest

from gqlrest.translate import (
    ExecutionResult,
    LoggingPrinter,
    NullPrinter,
    ResponseTranslator,
    StreamPrinter,
    printer_from_name,
)


def test_null_printer_accepts_everything() -> None:
    p = NullPrinter()
    assert p.println("a", 1) is None
    assert p.printf("%s %d", "a", 1) is None


def test_stream_printer_formats_lines() -> None:
    buf = io.StringIO()
    p = StreamPrinter(buf)
    p.println("code", 500)
    p.printf("recovered: %s", "boom")
    p.printf("literal 100%")
    assert buf.getvalue() == "code 500\nrecovered: boom\nliteral 100%\n"


def test_stream_printer_concurrent_lines_stay_whole() -> None:
    buf = io.StringIO()
    p = StreamPrinter(buf)

    def _emit(n: int) -> None:
        for i in range(50):
            p.printf("worker-%d line-%d", n, i)

    threads = [threading.Thread(target=_emit, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    lines = buf.getvalue().splitlines()
    assert len(lines) == 8 * 50
    assert all(line.startswith("worker-") and " line-" in line for line in lines)


def test_logging_printer_logs_at_error(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("gqlrest.test.printer")
    p = LoggingPrinter(logger)
    with caplog.at_level(logging.ERROR, logger="gqlrest.test.printer"):
        p.printf("restful response recover from error: %s", "bad data")
        p.println("a", "b")
    messages = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert messages == [
        (logging.ERROR, "restful response recover from error: bad data"),
        (logging.ERROR, "a b"),
    ]


def test_translator_reports_fallback_through_logging(caplog: pytest.LogCaptureFixture) -> None:
    translator = ResponseTranslator(printer=LoggingPrinter())
    with caplog.at_level(logging.ERROR, logger="gqlrest.translate"):
        translator.translate(ExecutionResult(data="[1]"), is_restful=True)
    assert len(caplog.records) == 1
    assert "MalformedDataError" in caplog.records[0].getMessage()


@pytest.mark.parametrize(
    "name, cls",
    [("logging", LoggingPrinter), ("stderr", StreamPrinter), ("none", NullPrinter), (" NONE ", NullPrinter)],
)
def test_printer_from_name(name: str, cls: type) -> None:
    assert isinstance(printer_from_name(name), cls)


def test_printer_from_name_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        printer_from_name("syslog")
