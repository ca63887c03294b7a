# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Module descriptor consumed (read-only) by pipeline processors.

A `ModuleInfo` is hashable. Per-module processor state that must survive a
registry reload (the incremental native source cache) is keyed by
`ModuleInfo.identity` instead, so flipping a codegen flag keeps it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class IosLanguage(Enum):
	OBJC = "objc"
	SWIFT = "swift"


@dataclass(frozen=True)
class ModuleInfo:
	name: str
	base_dir: Path
	# Opt-in: collapse each output bucket of generated native code into one file.
	single_file_codegen: bool = False
	android_codegen_enabled: bool = False
	ios_codegen_enabled: bool = False
	ios_language: IosLanguage = IosLanguage.OBJC
	cpp_codegen_enabled: bool = False
	ios_module_name_override: str | None = None

	@property
	def ios_module_name(self) -> str:
		"""Module/class prefix used for generated iOS sources."""
		return self.ios_module_name_override or self.name

	@property
	def identity(self) -> tuple[str, Path]:
		return (self.name, self.base_dir)
