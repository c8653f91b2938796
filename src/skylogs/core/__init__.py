# ---------------------------------------------------------------------------
# File: __init__.py
# ---------------------------------------------------------------------------
# Description:
#	Core package for skylogs (config, logging, telemetry).
#
# Notes:
#	Keep this lightweight. Re-export stable public helpers.
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial coding / release
# ---------------------------------------------------------------------------

from __future__ import annotations

from .config import AppConfig, ConfigError, load_config
from .logging import init_logging, get_logger, get_app_logger, shutdown_logging
from .telemetry import Telemetry, create_telemetry

__all__ = [
	"AppConfig",
	"ConfigError",
	"load_config",
	"get_logger",
	"get_app_logger",
	"init_logging",
	"shutdown_logging",
	"Telemetry",
	"create_telemetry",
]
