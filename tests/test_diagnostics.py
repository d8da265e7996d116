from __future__ import annotations

import json
import logging

import pytest

from windowio import (
    CompositeDiagnosticSink,
    LoggingDiagnosticSink,
    NullDiagnosticSink,
    RecordingDiagnosticSink,
    RingBuffer,
    configure_logging,
    format_ring,
    log_event,
    print_ring,
    rolling_window,
    stepping_window,
)


def test_print_ring_logs_values_in_order(caplog: pytest.LogCaptureFixture) -> None:
    ring = RingBuffer(5)
    ring.extend(bytes(range(5)))
    with caplog.at_level(logging.INFO, logger="windowio.diagnostics"):
        print_ring(ring, "test ring")
    assert "test ring :: Ring: [0, 1, 2, 3, 4]" in caplog.text


def test_format_ring_accepts_sequences() -> None:
    assert format_ring([7, 8], "msg") == "msg :: Ring: [7, 8]"
    assert format_ring([], "empty") == "empty :: Ring: []"


def test_recording_sink_sees_each_window_and_end() -> None:
    sink = RecordingDiagnosticSink()
    reader = stepping_window(bytes(range(11)), 4, 3, diagnostics=sink)

    windows = list(reader)

    assert [s.values for s in sink.snapshots] == [tuple(w) for w in windows]
    assert [s.index for s in sink.snapshots] == [0, 1, 2, 3]
    assert sink.snapshots[-1].count == 2
    assert sink.ended_after == 4


def test_end_of_stream_notified_once() -> None:
    sink = RecordingDiagnosticSink()
    reader = rolling_window(b"", 2, diagnostics=sink)
    reader.read()
    sink.ended_after = None
    reader.read()
    assert sink.ended_after is None


def test_logging_sink_emits_json_events(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("windowio.tests.sink")
    sink = LoggingDiagnosticSink(log=log, level=logging.INFO, json_logs=True)
    with caplog.at_level(logging.INFO, logger="windowio.tests.sink"):
        list(rolling_window(b"abc", 2, diagnostics=sink))

    events = [json.loads(record.getMessage()) for record in caplog.records]
    assert [e["event"] for e in events] == ["window", "window", "end_of_stream"]
    assert events[0]["ring"] == "window 0 :: Ring: [97, 98]"
    assert events[-1]["windows"] == 2


def test_logging_sink_skips_disabled_levels(caplog: pytest.LogCaptureFixture) -> None:
    log = logging.getLogger("windowio.tests.quiet")
    sink = LoggingDiagnosticSink(log=log, level=logging.DEBUG)
    with caplog.at_level(logging.WARNING, logger="windowio.tests.quiet"):
        list(rolling_window(b"abc", 2, diagnostics=sink))
    assert not caplog.records


def test_composite_sink_fans_out() -> None:
    first, second = RecordingDiagnosticSink(), RecordingDiagnosticSink()
    sink = CompositeDiagnosticSink([first, NullDiagnosticSink(), second])
    list(rolling_window(b"abcd", 3, diagnostics=sink))
    assert len(first.snapshots) == len(second.snapshots) == 2
    assert first.ended_after == second.ended_after == 2


def test_log_event_plain_and_env_json(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch) -> None:
    log = logging.getLogger("windowio.tests.events")
    with caplog.at_level(logging.INFO, logger="windowio.tests.events"):
        log_event(log, "plain", json_logs=False, size=3)
        monkeypatch.setenv("WINDOWIO_JSON_LOGS", "true")
        log_event(log, "structured", size=4)

    assert "'event': 'plain'" in caplog.records[0].getMessage()
    assert json.loads(caplog.records[1].getMessage()) == {"event": "structured", "size": 4}


def test_configure_logging_reuses_package_handler(capsys: pytest.CaptureFixture[str]) -> None:
    log = configure_logging("debug", json_logs=False)
    try:
        again = configure_logging("info", json_logs=True)
        assert again is log is logging.getLogger("windowio")
        handlers = [h for h in log.handlers if isinstance(h, logging.StreamHandler)]
        assert len(handlers) == 1
        assert log.level == logging.INFO

        log_event(logging.getLogger("windowio.tests.configured"), "ready", json_logs=True, size=2)
        line = capsys.readouterr().err.strip().splitlines()[-1]
        assert json.loads(line) == {
            "event": "ready",
            "size": 2,
            "level": "INFO",
            "logger": "windowio.tests.configured",
        }
    finally:
        for handler in list(log.handlers):
            log.removeHandler(handler)
        log.setLevel(logging.NOTSET)
