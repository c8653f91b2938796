# ---------------------------------------------------------------------------
# File: config.py
# ---------------------------------------------------------------------------
# Description:
#	Optional JSON configuration for skylogs.
#
# Notes:
#	- appsettings.json is read from the working directory if present.
#	- A missing file is not an error; an unreadable one is.
#	- Keys may be dotted ("logging.level") and resolve into nested objects.
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial coding / release
# ---------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any
import json


DEFAULT_CONFIG_FILE = "appsettings.json"

_MISSING = object()


class ConfigError(ValueError):
	"""
	Raised when a configuration file exists but cannot be used.
	"""


@dataclass(frozen=True, slots=True)
class AppConfig:
	"""
	Light wrapper for config options.

	get("logging.level") checks for a flat "logging.level" key first, then
	walks {"logging": {"level": ...}}.
	"""
	options: dict[str, Any] | None = None

	def get(self, key: str, default: Any = None) -> Any:
		if not self.options:
			return default

		if key in self.options:
			return self.options[key]

		node: Any = self.options
		for part in key.split("."):
			if not isinstance(node, dict):
				return default
			node = node.get(part, _MISSING)
			if node is _MISSING:
				return default
		return node


def load_config(
	filename: str = DEFAULT_CONFIG_FILE,
	base_dir: str | Path | None = None,
) -> AppConfig:
	"""
	Load configuration from a JSON document.

	Args:
		filename:	File name (or path) of the document.
		base_dir:	Directory to resolve filename against (default: cwd).

	Returns:
		AppConfig (empty if the file does not exist).

	Raises:
		ConfigError: the file exists but is not a JSON object.
	"""
	path = Path(filename)
	if not path.is_absolute():
		path = Path(base_dir if base_dir is not None else Path.cwd()) / filename

	if not path.is_file():
		return AppConfig()

	try:
		with path.open("r", encoding="utf-8") as fh:
			data = json.load(fh)
	except (OSError, json.JSONDecodeError) as exc:
		raise ConfigError(f"Cannot read config file {str(path)!r}: {exc}") from exc

	if not isinstance(data, dict):
		raise ConfigError(f"Config file {str(path)!r} must contain a JSON object")

	return AppConfig(data)


def cfg_get(cfg: Any | None, key: str, default: Any = None) -> Any:
	"""
	Best-effort config getter.

	Supports:
	- cfg.get(key, default)
	- dict-like objects
	"""
	if cfg is None:
		return default

	getter = getattr(cfg, "get", None)
	if callable(getter):
		try:
			return getter(key, default)
		except Exception:
			return default

	try:
		# dict-like fallback
		return cfg[key]  # type: ignore[index]
	except Exception:
		return default


def cfg_first(cfg: Any | None, keys: tuple[str, ...], default: Any = None) -> Any:
	"""
	Return the value of the first key that is set (first match wins).
	"""
	for key in keys:
		value = cfg_get(cfg, key, None)
		if value is not None:
			return value
	return default
