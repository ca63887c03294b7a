# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .diagnostics import Diagnostic


@dataclass(eq=False)
class CompilerError(Exception):
	"""
	A structured, serializable error attached to a single compilation item.

	Errors are item-scoped: processors return them inside the item sequence
	instead of raising, so one broken bucket never aborts a whole pass.
	`reason_code` is stable and meant for tests and tooling.
	"""

	reason_code: str
	message: str
	module: str | None = None
	filename: str | None = None
	relative_path: str | None = None
	emitted_by: str | None = None
	conflicting_filename: str | None = None
	conflicting_relative_path: str | None = None
	conflicting_emitted_by: str | None = None

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"module": self.module,
			"filename": self.filename,
			"relative_path": self.relative_path,
			"emitted_by": self.emitted_by,
			"conflicting_filename": self.conflicting_filename,
			"conflicting_relative_path": self.conflicting_relative_path,
			"conflicting_emitted_by": self.conflicting_emitted_by,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.module:
			parts.append(f"module={self.module}")
		if self.filename:
			parts.append(f"filename={self.filename}")
		if self.conflicting_filename:
			parts.append(f"conflicting_filename={self.conflicting_filename}")
		return " ".join(parts)

	def to_diagnostic(self, file: str | None = None, *, phase: str | None = None) -> Diagnostic:
		notes: list[str] = []
		if self.conflicting_filename is not None:
			notes.append(f"'{self.filename}' writes to '{_path_label(self.relative_path)}'")
			notes.append(f"'{self.conflicting_filename}' writes to '{_path_label(self.conflicting_relative_path)}'")
		cause = self.__cause__
		if cause is not None:
			notes.append(f"caused by: {cause}")
		return Diagnostic(message=self.message, code=self.reason_code, phase=phase, file=file, notes=notes)


def _path_label(path: str | None) -> str:
	return path if path is not None else "<null>"
