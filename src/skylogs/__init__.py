# ---------------------------------------------------------------------------
# File: __init__.py
# ---------------------------------------------------------------------------
# Description:
#	skylogs: console demo wiring a logging sink and a telemetry collector.
#
# ---------------------------------------------------------------------------

__version__ = "0.1.0"
