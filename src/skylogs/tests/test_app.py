# ---------------------------------------------------------------------------
# File: test_app.py
# ---------------------------------------------------------------------------
# Description:
#	Tests for the composition root (skylogs.app).
#
# Notes:
#	- run() is exercised with an isolated logger and a MemorySink.
#	- main() is exercised against tmp_path with a fake prompt, so no test
#	  ever blocks on the console.
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial tests
# ---------------------------------------------------------------------------

from __future__ import annotations

import json
import logging
from typing import Any

import pytest

from skylogs import app as skapp
from skylogs.core import logging as sklog
from skylogs.core.telemetry import MemorySink, Telemetry


class _ListHandler(logging.Handler):
	def __init__(self) -> None:
		super().__init__(level=logging.DEBUG)
		self.records: list[logging.LogRecord] = []

	def emit(self, record: logging.LogRecord) -> None:
		self.records.append(record)


class _FailingTelemetry(Telemetry):
	def event(self, name: str, attrs: Any = None) -> None:
		raise ConnectionError("collector unreachable")


@pytest.fixture
def captured():
	handler = _ListHandler()
	logger = logging.getLogger("skylogs.test.app")
	logger.handlers = [handler]
	logger.setLevel(logging.DEBUG)
	logger.propagate = False
	return logger, handler


@pytest.fixture(autouse=True)
def _reset_logging():
	root = logging.getLogger()
	level = root.level
	yield
	sklog._reset_logging_for_tests()
	root.setLevel(level)


def test_run_emits_one_record_and_one_event(captured):
	logger, handler = captured
	sink = MemorySink()
	telemetry = Telemetry(enabled=True, sink=sink)

	result = skapp.run(telemetry, logger=logger)

	assert result.ok
	assert result.exit_code == 0
	assert len(handler.records) == 1
	assert handler.records[0].levelno == logging.INFO
	assert handler.records[0].fields == {"name": "Sky", "text": "Hello"}

	# delivery within the wait is best-effort; give the worker a real bound here
	assert telemetry.wait_for_delivery(timeout=2.0)
	assert [e.name for e in sink.events] == ["Person Sky spoke"]


def test_run_uses_configured_name_and_text(captured):
	logger, handler = captured
	sink = MemorySink()
	telemetry = Telemetry(enabled=True, sink=sink)
	cfg = {"app.person_name": "River", "app.text": "Hi", "telemetry.flush_wait_ms": 0}

	result = skapp.run(telemetry, cfg=cfg, logger=logger)

	assert result.ok
	assert handler.records[0].fields == {"name": "River", "text": "Hi"}
	assert telemetry.wait_for_delivery(timeout=2.0)
	assert sink.events[0].name == "Person River spoke"


def test_run_bounds_the_flush_wait(captured, monkeypatch):
	logger, _ = captured
	telemetry = Telemetry(enabled=True, sink=MemorySink())
	seen: list[float] = []

	def _wait(timeout=None):
		seen.append(timeout)
		return False

	monkeypatch.setattr(telemetry, "wait_for_delivery", _wait)

	result = skapp.run(telemetry, cfg={"telemetry.flush_wait_ms": 250}, logger=logger)

	# an unfinished delivery is not a failure
	assert result.ok
	assert seen == [0.25]


def test_run_failure_is_logged_once_and_returned(captured):
	logger, handler = captured
	telemetry = _FailingTelemetry(enabled=True, sink=MemorySink())

	result = skapp.run(telemetry, logger=logger)

	assert not result.ok
	assert result.exit_code == 1
	assert isinstance(result.error, ConnectionError)

	errors = [r for r in handler.records if r.levelno == logging.ERROR]
	assert len(errors) == 1
	assert errors[0].getMessage() == "Stopped program because of exception"
	assert errors[0].exc_info is not None


def test_main_without_config_file_succeeds(tmp_path, monkeypatch):
	monkeypatch.chdir(tmp_path)
	prompts: list[str] = []

	code = skapp.main(prompt=prompts.append)

	assert code == 0
	assert prompts == ["Press ENTER to exit"]


def test_main_with_config_writes_logs_and_telemetry(tmp_path):
	log_file = tmp_path / "logs" / "skylogs.log"
	events_file = tmp_path / "logs" / "telemetry.jsonl"
	(tmp_path / "appsettings.json").write_text(json.dumps({
		"logging": {"console": False, "file": str(log_file)},
		"telemetry": {"sink": "jsonl", "path": str(events_file)},
		"app": {"pause_on_exit": False},
	}), encoding="utf-8")

	code = skapp.main(base_dir=tmp_path, prompt=lambda _: pytest.fail("should not pause"))

	assert code == 0
	assert "Person Sky spoke Hello name='Sky' text='Hello'" in log_file.read_text(encoding="utf-8")
	events = [json.loads(line) for line in events_file.read_text(encoding="utf-8").splitlines()]
	assert [e["name"] for e in events] == ["Person Sky spoke"]

	# logging is shut down on the way out
	assert sklog._HANDLERS == []


def test_main_maps_startup_failure_to_exit_code(tmp_path, monkeypatch):
	(tmp_path / "appsettings.json").write_text(
		json.dumps({"logging": {"console": False}}),
		encoding="utf-8",
	)
	prompts: list[str] = []

	def _boom(*args, **kwargs):
		raise RuntimeError("collector misconfigured")

	monkeypatch.setattr(skapp, "create_telemetry", _boom)

	code = skapp.main(base_dir=tmp_path, prompt=prompts.append)

	assert code == 1
	assert prompts == []
	assert sklog._HANDLERS == []


def test_main_malformed_config_returns_failure(tmp_path):
	(tmp_path / "appsettings.json").write_text("{oops", encoding="utf-8")

	assert skapp.main(base_dir=tmp_path, prompt=lambda _: None) == 1


def test_main_does_not_pause_without_tty(tmp_path, monkeypatch):
	class _Stdin:
		def isatty(self) -> bool:
			return False

	monkeypatch.setattr(skapp.sys, "stdin", _Stdin())
	monkeypatch.setattr("builtins.input", lambda *_: pytest.fail("should not pause"))

	assert skapp.main(base_dir=tmp_path) == 0
