# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from enum import Enum
from typing import Protocol

from valdic.modules.info import IosLanguage, ModuleInfo
from valdic.pipeline.items import NativeSource


class TypeKind(Enum):
	CLASS = "class"
	INTERFACE = "interface"
	ENUM = "enum"


class GeneratorError(Exception):
	"""The generator could not produce sources for the requested type."""


class NativeCodeGenerator(Protocol):
	def emit_empty_type(
		self,
		name: str,
		module: ModuleInfo,
		kind: TypeKind,
		language: IosLanguage,
	) -> list[NativeSource]:
		"""
		Return language-correct sources for a type with no members.

		Raises `GeneratorError` (or `OSError`) when generation fails.
		"""
		...
