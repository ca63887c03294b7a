# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Common diagnostic structure for pipeline processors and the driver.

Processors never print: they attach errors to items, and the driver renders
those errors as diagnostics (human text or JSON).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Diagnostic:
	"""Represents a compiler diagnostic (error/warning/etc.)."""

	message: str
	code: str | None = None
	# Pipeline phase that produced the diagnostic ("combine", "web", "config").
	phase: str | None = None
	severity: str = "error"
	file: str | None = None
	notes: list[str] = field(default_factory=list)

	def format_human(self) -> str:
		loc = self.file if self.file is not None else "<unknown>"
		text = f"{loc}:?:?: {self.severity}: {self.message}"
		for note in self.notes:
			text += f"\n  note: {note}"
		return text

	def to_json(self) -> dict[str, Any]:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.file,
			"line": None,
			"column": None,
			"notes": list(self.notes),
		}
