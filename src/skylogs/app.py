# ---------------------------------------------------------------------------
# File: app.py
# ---------------------------------------------------------------------------
# Description:
#   Composition root for skylogs.
#
# Notes:
#   - run() wires a Person to the logging sink, says one sentence and
#     reports it as a telemetry event.
#   - main() owns the resources: config, logging, telemetry. Logging is
#     always shut down on the way out, success or failure.
#   - The wait after flush() is a bounded, best-effort wait. Delivery is
#     not guaranteed when it returns.
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial coding / release
# 10/17/2026	skylogs maintainers			Return RunResult instead of re-raising
# ---------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional
import logging
import sys

from skylogs.core.config import cfg_get, load_config
from skylogs.core.logging import get_app_logger, init_logging, shutdown_logging
from skylogs.core.telemetry import Telemetry, create_telemetry
from skylogs.services import Person


DEFAULT_PERSON_NAME = "Sky"
DEFAULT_TEXT = "Hello"
DEFAULT_FLUSH_WAIT_MS = 500

EXIT_OK = 0
EXIT_FAILURE = 1


@dataclass(frozen=True, slots=True)
class RunResult:
	"""
	Outcome of run(). error is set when ok is False.
	"""
	ok: bool
	error: Optional[BaseException] = None

	@property
	def exit_code(self) -> int:
		return EXIT_OK if self.ok else EXIT_FAILURE


def run(
	telemetry: Telemetry,
	cfg: Any | None = None,
	logger: Optional[logging.Logger] = None,
) -> RunResult:
	"""
	Construct a Person, have it speak once and report the event.

	Args:
		telemetry:	Telemetry collector to report to.
		cfg:		Optional config (AppConfig or dict-like).
		logger:		Logger for the Person and for failures
					(default: skylogs.app / skylogs.app.person).
	"""
	log = logger or get_app_logger()

	try:
		person = Person(logger or get_app_logger("person"))
		person.name = str(cfg_get(cfg, "app.person_name", DEFAULT_PERSON_NAME))
		person.talk(str(cfg_get(cfg, "app.text", DEFAULT_TEXT)))

		telemetry.event(f"Person {person.name} spoke")
		telemetry.flush()

		wait_ms = float(cfg_get(cfg, "telemetry.flush_wait_ms", DEFAULT_FLUSH_WAIT_MS))
		telemetry.wait_for_delivery(timeout=max(0.0, wait_ms) / 1000.0)
	except Exception as exc:
		log.exception("Stopped program because of exception")
		return RunResult(ok=False, error=exc)

	return RunResult(ok=True)


def main(
	base_dir: str | Path | None = None,
	prompt: Optional[Callable[[str], Any]] = None,
) -> int:
	"""
	Process entry point.

	Args:
		base_dir:	Directory holding appsettings.json (default: cwd).
		prompt:		Called with the exit prompt when pausing (default: input).

	Returns:
		Process exit status.
	"""
	log = get_app_logger()

	try:
		cfg = load_config(base_dir=base_dir)
		init_logging(cfg)

		with create_telemetry(cfg, logger=get_app_logger("telemetry")) as telemetry:
			result = run(telemetry, cfg=cfg)

		if result.ok and _should_pause(cfg, prompt):
			(prompt or input)("Press ENTER to exit")

		return result.exit_code
	except Exception:
		log.exception("Stopped program because of exception")
		return EXIT_FAILURE
	finally:
		shutdown_logging()


def _should_pause(cfg: Any, prompt: Optional[Callable[[str], Any]]) -> bool:
	if not bool(cfg_get(cfg, "app.pause_on_exit", True)):
		return False
	if prompt is not None:
		return True
	stdin = sys.stdin
	return stdin is not None and stdin.isatty()
