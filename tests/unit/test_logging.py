"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from homework_assigner.logging import JsonFormatter, configure_logging, normalize_log_level


def _record(**extra: object) -> logging.LogRecord:
    record = logging.LogRecord(
        name="homework_assigner.github.client",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Issue created",
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_extra_fields() -> None:
    payload = json.loads(JsonFormatter().format(_record(issue_number=12, assignee="alice")))

    assert payload["level"] == "INFO"
    assert payload["logger"] == "homework_assigner.github.client"
    assert payload["message"] == "Issue created"
    assert payload["extra"] == {"issue_number": 12, "assignee": "alice"}


def test_json_formatter_omits_empty_extra() -> None:
    payload = json.loads(JsonFormatter().format(_record()))

    assert "extra" not in payload
    assert "exception" not in payload


def test_configure_logging_writes_json_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("info")

    logging.getLogger("homework_assigner.test").info("hello", extra={"course": "acme-school"})

    captured = capsys.readouterr()
    assert captured.out == ""
    line = json.loads(captured.err.strip().splitlines()[-1])
    assert line["message"] == "hello"
    assert line["extra"] == {"course": "acme-school"}
    assert logging.getLogger().level == logging.INFO


def test_configure_logging_to_file_leaves_stderr_alone(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    log_file = tmp_path / "logs" / "assigner.jsonl"
    handler = configure_logging("debug", log_file=log_file)
    try:
        logging.getLogger("homework_assigner.test").debug("quiet", extra={"attempt": 2})
    finally:
        logging.getLogger().removeHandler(handler)
        handler.close()

    assert capsys.readouterr().err == ""
    line = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
    assert line["message"] == "quiet"
    assert line["extra"] == {"attempt": 2}


@pytest.mark.parametrize(("value", "expected"), [("info", "INFO"), (" Warning ", "WARNING")])
def test_normalize_log_level(value: str, expected: str) -> None:
    assert normalize_log_level(value) == expected


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        configure_logging("loud")
