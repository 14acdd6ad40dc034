from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from femto.runtime import telemetry


def handlers() -> list[logging.Handler]:
    return list(logging.getLogger(telemetry.DEFAULT_LOGGER_NAME).handlers)


def test_colored_console_uses_rich_handler() -> None:
    telemetry.configure(config=telemetry.TelemetryConfig(console=True, colored=True))

    assert any(isinstance(handler, RichHandler) for handler in handlers())


def test_editor_preset_keeps_the_console_quiet(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FEMTO_LOG_FILE", raising=False)
    monkeypatch.setenv("FEMTO_LOG_LEVEL", "debug")

    config = telemetry.configure(preset="editor")

    assert config.console is False
    assert config.level == "DEBUG"
    assert [type(handler) for handler in handlers()] == [logging.NullHandler]


def test_environment_drives_default_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FEMTO_DISABLE_CONSOLE", "1")
    monkeypatch.setenv("FEMTO_LOG_JSON", "true")

    config = telemetry.configure()

    assert config.console is False
    assert config.json_format is True
    assert telemetry.active_config() is config


def test_configure_rejects_bad_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="nope")
    with pytest.raises(ValueError):
        telemetry.configure(config=telemetry.TelemetryConfig(), preset="development")


def test_get_logger_nests_under_editor_logger() -> None:
    assert telemetry.get_logger("buffer").name == "femto.buffer"
    assert telemetry.get_logger("femto.search").name == "femto.search"


def test_events_and_failed_spans_are_written_as_json(tmp_path: Path) -> None:
    log_file = tmp_path / "femto.jsonl"
    telemetry.configure(
        config=telemetry.TelemetryConfig(
            level="INFO", console=False, json_format=True, log_file=str(log_file)
        )
    )

    telemetry.record_event("file.save", data={"path": "a.txt", "bytes": 3})
    with pytest.raises(RuntimeError):
        with telemetry.span("fileio::save", component="fileio"):
            raise RuntimeError("disk full")

    records = [json.loads(line) for line in log_file.read_text().splitlines()]

    assert records[0]["message"] == "event::file.save event=file.save path=a.txt bytes=3"
    assert records[0]["data"]["bytes"] == "3"
    assert records[1]["level"] == "ERROR"
    assert records[1]["data"]["reason"] == "disk full"
    assert records[1]["data"]["component"] == "fileio"


def test_span_end_is_logged_at_debug(tmp_path: Path) -> None:
    log_file = tmp_path / "debug.log"
    telemetry.configure(
        config=telemetry.TelemetryConfig(level="DEBUG", console=False, log_file=str(log_file))
    )

    with telemetry.span("buffer::insert_char", metadata={"buffer": "main"}) as handle:
        handle.add_metadata("row", 4)

    text = log_file.read_text()
    assert "span::end" in text
    assert "row=4" in text
    assert "elapsed_ms=" in text
