# ---------------------------------------------------------------------------
# File: person.py
# ---------------------------------------------------------------------------
# Description:
#	Person service: a named speaker that logs what it says.
#
# ---------------------------------------------------------------------------
# Revision History
# ---------------------------------------------------------------------------
# Date			Author						Change
# ---------------------------------------------------------------------------
# 10/17/2026	skylogs maintainers			Initial coding / release
# ---------------------------------------------------------------------------

from __future__ import annotations

import logging


class Person:
	"""
	Person

	Holds a display name. talk() emits one INFO record carrying the
	name and the spoken text as structured fields.
	"""

	def __init__(self, logger: logging.Logger) -> None:
		self._log = logger
		self.name: str = ""

	def talk(self, text: str) -> None:
		self._log.info(
			"Person %s spoke %s",
			self.name,
			text,
			extra={"fields": {"name": self.name, "text": text}},
		)

	speak = talk

	def __repr__(self) -> str:
		return f"<{self.__class__.__name__} name={self.name!r}>"
