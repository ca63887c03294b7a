# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compiler (per-invocation) and project (per-repository) configuration.

Both are read-only for processors. `CompilerConfig` mirrors command line
flags; `ProjectConfig` is loaded from a small JSON object file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable


@dataclass(frozen=True)
class CompilerConfig:
	# When non-empty, native code is only generated for these module names.
	only_generate_native_code_for_modules: frozenset[str] = field(default_factory=frozenset)

	@classmethod
	def from_module_names(cls, names: Iterable[str] | None) -> "CompilerConfig":
		return cls(only_generate_native_code_for_modules=frozenset(names or ()))

	def allows_module(self, name: str) -> bool:
		if not self.only_generate_native_code_for_modules:
			return True
		return name in self.only_generate_native_code_for_modules


@dataclass(frozen=True)
class ProjectConfig:
	cpp_import_path_prefix: str | None = None


_PROJECT_CONFIG_KEYS = {"cpp_import_path_prefix"}


def load_project_config(path: Path) -> ProjectConfig:
	"""
	Load a `ProjectConfig` from a JSON object file.

	Unknown keys are rejected so typos fail loudly instead of being ignored.
	"""
	data = json.loads(path.read_text(encoding="utf-8"))
	if not isinstance(data, dict):
		raise ValueError(f"project config '{path}' must be a JSON object")
	unknown = sorted(set(data.keys()) - _PROJECT_CONFIG_KEYS)
	if unknown:
		raise ValueError(f"project config '{path}' has unknown fields: {', '.join(unknown)}")
	prefix = data.get("cpp_import_path_prefix")
	if prefix is not None and not isinstance(prefix, str):
		raise ValueError("project config cpp_import_path_prefix must be a string")
	return ProjectConfig(cpp_import_path_prefix=prefix or None)
