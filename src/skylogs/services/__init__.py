# ---------------------------------------------------------------------------
# File: __init__.py
# Description:
#	Public service exports for skylogs.
#
# Notes:
#	- Services receive their logger through the constructor.
#	- The composition root (skylogs.app) constructs and wires them.
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial coding / release
# ---------------------------------------------------------------------------

from .person import Person

__all__ = [
	"Person",
]
