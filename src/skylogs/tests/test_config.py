# ---------------------------------------------------------------------------
# File: test_config.py
# ---------------------------------------------------------------------------
# Description:
#	Unit tests for skylogs.core.config.
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

import pytest

from skylogs.core.config import AppConfig, ConfigError, cfg_first, cfg_get, load_config


def test_missing_file_gives_empty_config(tmp_path):
	cfg = load_config(base_dir=tmp_path)

	assert isinstance(cfg, AppConfig)
	assert cfg.get("logging.level", "fallback") == "fallback"


def test_load_nested_and_dotted_lookup(tmp_path):
	(tmp_path / "appsettings.json").write_text(
		json.dumps({"logging": {"level": "INFO"}, "app": {"person_name": "Sky"}}),
		encoding="utf-8",
	)

	cfg = load_config(base_dir=tmp_path)

	assert cfg.get("logging.level") == "INFO"
	assert cfg.get("app.person_name") == "Sky"
	assert cfg.get("app.missing", 7) == 7
	assert cfg.get("logging.level.deeper", "x") == "x"


def test_flat_key_wins_over_nested():
	cfg = AppConfig({"logging.level": "WARNING", "logging": {"level": "INFO"}})

	assert cfg.get("logging.level") == "WARNING"


def test_falsy_values_are_returned():
	cfg = AppConfig({"app": {"pause_on_exit": False}})

	assert cfg.get("app.pause_on_exit", True) is False


def test_malformed_file_raises_config_error(tmp_path):
	(tmp_path / "appsettings.json").write_text("{not json", encoding="utf-8")

	with pytest.raises(ConfigError):
		load_config(base_dir=tmp_path)


def test_non_object_document_raises_config_error(tmp_path):
	(tmp_path / "appsettings.json").write_text("[1, 2, 3]", encoding="utf-8")

	with pytest.raises(ConfigError):
		load_config(base_dir=tmp_path)


def test_custom_filename(tmp_path):
	(tmp_path / "other.json").write_text('{"a": 1}', encoding="utf-8")

	assert load_config("other.json", base_dir=tmp_path).get("a") == 1


def test_cfg_get_supports_none_dicts_and_getters():
	assert cfg_get(None, "x", 1) == 1
	assert cfg_get({"x": 2}, "x", 1) == 2
	assert cfg_get(AppConfig({"x": 3}), "x", 1) == 3


def test_cfg_first_first_match_wins():
	cfg = {"log_level": "ERROR"}

	assert cfg_first(cfg, ("logging.level", "log_level"), "INFO") == "ERROR"
	assert cfg_first(cfg, ("nope", "also_nope"), "INFO") == "INFO"
