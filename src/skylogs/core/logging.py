# ---------------------------------------------------------------------------
# File: logging.py
# ---------------------------------------------------------------------------
# Description:
#	Logging sink setup for skylogs (stdlib logging).
#
# Notes:
#	- Uses Python stdlib logging only.
#	- Idempotent initialization (won't duplicate handlers).
#	- Records may carry structured fields via extra={"fields": {...}};
#	  StructuredFormatter renders them as trailing key=value pairs.
#	- shutdown_logging() flushes and closes everything init_logging installed.
#
#	Supported cfg keys (first match wins):
#	- Level:
#		"logging.level", "log_level"	(default: "DEBUG")
#	- Console handler:
#		"logging.console", "log_console" (default: True)
#	- File handler:
#		"logging.file", "log_file"	(default: None)
#	- File mode:
#		"logging.file_mode", "log_file_mode" (default: "a")
#	- Root reset (clear handlers on re-init):
#		"logging.reset_root", "log_reset_root" (default: True)
#	- Format:
#		"logging.format", "log_format" (default: standard format)
#	- Date format:
#		"logging.datefmt", "log_datefmt" (default: "%Y-%m-%d %H:%M:%S")
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial coding / release
# 10/17/2026	skylogs maintainers			Add StructuredFormatter + shutdown_logging
# ---------------------------------------------------------------------------

from __future__ import annotations

from typing import Any
import logging
import os

from .config import cfg_first


DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"
FIELDS_ATTR = "fields"


# ---------------------------------------------------------------------------
# Module-scoped state (idempotent init)
# ---------------------------------------------------------------------------

_INITIALIZED: bool = False
_CONFIG_SIGNATURE: tuple[Any, ...] | None = None
_HANDLERS: list[logging.Handler] = []


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

class StructuredFormatter(logging.Formatter):
	"""
	Formatter that appends a record's structured fields as key=value pairs.

	Example:
		2026-10-17 10:00:00 [INFO] skylogs.app.person: Person Sky spoke Hello name='Sky' text='Hello'
	"""

	def format(self, record: logging.LogRecord) -> str:
		text = super().format(record)

		fields = getattr(record, FIELDS_ATTR, None)
		if not isinstance(fields, dict) or not fields:
			return text

		pairs = " ".join(f"{key}={value!r}" for key, value in fields.items())
		return f"{text} {pairs}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def get_logger(name: str) -> logging.Logger:
	"""
	Return a logger by explicit name.
	"""
	return logging.getLogger(name)


def get_app_logger(component: str | None = None) -> logging.Logger:
	"""
	Return an application-scoped logger.

	Examples:
		get_app_logger()            -> skylogs.app
		get_app_logger("person")    -> skylogs.app.person
		get_app_logger("telemetry") -> skylogs.app.telemetry
	"""
	base = "skylogs.app"
	if component:
		return logging.getLogger(f"{base}.{component}")
	return logging.getLogger(base)


def init_logging(cfg: Any | None = None) -> None:
	"""
	Initialize stdlib logging for skylogs.

	This is safe to call multiple times. Reconfiguration occurs only if the
	configuration signature changes (to prevent duplicate handlers).

	Args:
		cfg:
			Any object that supports cfg.get(key, default) (e.g., AppConfig) or a dict-like.
	"""
	global _INITIALIZED, _CONFIG_SIGNATURE

	level = _coerce_level(cfg_first(cfg, ("logging.level", "log_level"), "DEBUG"))
	console_enabled = bool(cfg_first(cfg, ("logging.console", "log_console"), True))
	log_file = cfg_first(cfg, ("logging.file", "log_file"), None)
	file_mode = _coerce_file_mode(cfg_first(cfg, ("logging.file_mode", "log_file_mode"), "a"))
	reset_root = bool(cfg_first(cfg, ("logging.reset_root", "log_reset_root"), True))
	fmt = str(cfg_first(cfg, ("logging.format", "log_format"), DEFAULT_FORMAT))
	datefmt = str(cfg_first(cfg, ("logging.datefmt", "log_datefmt"), DEFAULT_DATEFMT))

	log_file = str(log_file) if log_file else None

	# Signature used to avoid duplicating handlers on repeated init calls
	signature: tuple[Any, ...] = (
		level,
		console_enabled,
		log_file,
		file_mode,
		reset_root,
		fmt,
		datefmt,
	)

	if _INITIALIZED and _CONFIG_SIGNATURE == signature:
		return

	_configure_root_logger(
		level=level,
		console_enabled=console_enabled,
		log_file=log_file,
		file_mode=file_mode,
		fmt=fmt,
		datefmt=datefmt,
		reset_root=reset_root,
	)

	_INITIALIZED = True
	_CONFIG_SIGNATURE = signature


def shutdown_logging() -> None:
	"""
	Flush, close and detach every handler installed by init_logging().

	Safe to call when logging was never initialized, and safe to call twice.
	"""
	global _INITIALIZED, _CONFIG_SIGNATURE

	root = logging.getLogger()
	for handler in list(_HANDLERS):
		root.removeHandler(handler)
		handler.flush()
		handler.close()

	_HANDLERS.clear()
	_INITIALIZED = False
	_CONFIG_SIGNATURE = None


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------

def _coerce_level(level: Any) -> int:
	"""
	Convert common representations of logging levels to an int.
	"""
	if isinstance(level, bool):
		return logging.INFO

	if isinstance(level, int):
		return level

	if isinstance(level, str):
		val = level.strip().upper()
		if val.isdigit():
			return int(val)
		# "TRACE" has no stdlib level; treat it as the lowest named one
		if val == "TRACE":
			return logging.DEBUG
		resolved = getattr(logging, val, None)
		return resolved if isinstance(resolved, int) else logging.INFO

	return logging.INFO


def _coerce_file_mode(mode: Any) -> str:
	"""
	Normalize file mode for FileHandler.
	Only allow "a" or "w" to keep this simple/safe.
	"""
	if isinstance(mode, str):
		val = mode.strip().lower()
		if val in ("a", "w"):
			return val
	return "a"


def _configure_root_logger(
	*,
	level: int,
	console_enabled: bool,
	log_file: str | None,
	file_mode: str,
	fmt: str,
	datefmt: str,
	reset_root: bool,
) -> None:
	"""
	Configure the root logger in a safe, idempotent way.

	Handlers from a previous init_logging() call are always replaced. If
	reset_root=True, any other root handlers are removed as well.
	"""
	root = logging.getLogger()
	root.setLevel(level)

	for h in list(_HANDLERS):
		root.removeHandler(h)
		h.close()
	_HANDLERS.clear()

	if reset_root:
		for h in list(root.handlers):
			# pytest's capture handlers are left alone
			if type(h).__module__.startswith("_pytest"):
				continue
			root.removeHandler(h)

	formatter = StructuredFormatter(fmt=fmt, datefmt=datefmt)

	if console_enabled:
		ch = logging.StreamHandler()
		ch.setLevel(level)
		ch.setFormatter(formatter)
		_install(root, ch)

	if log_file:
		_ensure_parent_dir(log_file)
		fh = logging.FileHandler(log_file, mode=file_mode, encoding="utf-8")
		fh.setLevel(level)
		fh.setFormatter(formatter)
		_install(root, fh)


def _install(root: logging.Logger, handler: logging.Handler) -> None:
	root.addHandler(handler)
	_HANDLERS.append(handler)


def _ensure_parent_dir(path: str) -> None:
	"""
	Create parent directory for a log file if needed.
	"""
	parent = os.path.dirname(os.path.abspath(path))
	if not parent:
		return
	try:
		os.makedirs(parent, exist_ok=True)
	except Exception:
		# FileHandler reports the real error if the directory is still missing.
		pass


# ---------------------------------------------------------------------------
# Test helper
# ---------------------------------------------------------------------------

def _reset_logging_for_tests() -> None:
	"""
	Reset module-scoped init state (intended for unit tests only).
	"""
	shutdown_logging()
