# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Module registry: resolves a module name to its `ModuleInfo`.

Registry file format (JSON):

	{
	  "modules": [
	    {
	      "name": "my_module",
	      "base_dir": "src/my_module",
	      "single_file_codegen": true,
	      "android_codegen": true,
	      "ios_codegen": true,
	      "ios_language": "objc",
	      "ios_module_name": "SCMyModule",
	      "cpp_codegen": false
	    }
	  ]
	}

`base_dir` is resolved relative to the registry file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, Iterator

from .info import IosLanguage, ModuleInfo


class UnknownModuleError(KeyError):
	"""Raised when a module name is not known to the registry."""


class ModuleRegistry:
	def __init__(self, modules: Iterable[ModuleInfo] = ()) -> None:
		self._by_name: dict[str, ModuleInfo] = {}
		for module in modules:
			if module.name in self._by_name:
				raise ValueError(f"duplicate module name '{module.name}' in registry")
			self._by_name[module.name] = module

	def lookup(self, name: str) -> ModuleInfo:
		try:
			return self._by_name[name]
		except KeyError:
			raise UnknownModuleError(name) from None

	def __contains__(self, name: object) -> bool:
		return name in self._by_name

	def __iter__(self) -> Iterator[ModuleInfo]:
		return iter(self._by_name.values())

	def __len__(self) -> int:
		return len(self._by_name)


_MODULE_KEYS = {
	"name",
	"base_dir",
	"single_file_codegen",
	"android_codegen",
	"ios_codegen",
	"ios_language",
	"ios_module_name",
	"cpp_codegen",
}


def _flag(entry: dict[str, Any], key: str, name: str) -> bool:
	value = entry.get(key, False)
	if not isinstance(value, bool):
		raise ValueError(f"module '{name}' field '{key}' must be a boolean")
	return value


def _decode_module(entry: Any, root: Path) -> ModuleInfo:
	if not isinstance(entry, dict):
		raise ValueError("registry module entry must be an object")
	name = entry.get("name")
	if not isinstance(name, str) or not name:
		raise ValueError("registry module entry missing 'name'")
	unknown = sorted(set(entry.keys()) - _MODULE_KEYS)
	if unknown:
		raise ValueError(f"module '{name}' has unknown fields: {', '.join(unknown)}")
	base_dir = entry.get("base_dir", name)
	if not isinstance(base_dir, str):
		raise ValueError(f"module '{name}' field 'base_dir' must be a string")
	lang_s = entry.get("ios_language", IosLanguage.OBJC.value)
	try:
		ios_language = IosLanguage(lang_s)
	except ValueError as err:
		raise ValueError(f"module '{name}' has unknown ios_language '{lang_s}'") from err
	ios_module_name = entry.get("ios_module_name")
	if ios_module_name is not None and not isinstance(ios_module_name, str):
		raise ValueError(f"module '{name}' field 'ios_module_name' must be a string")
	return ModuleInfo(
		name=name,
		base_dir=root / base_dir,
		single_file_codegen=_flag(entry, "single_file_codegen", name),
		android_codegen_enabled=_flag(entry, "android_codegen", name),
		ios_codegen_enabled=_flag(entry, "ios_codegen", name),
		ios_language=ios_language,
		cpp_codegen_enabled=_flag(entry, "cpp_codegen", name),
		ios_module_name_override=ios_module_name or None,
	)


def load_module_registry(path: Path) -> ModuleRegistry:
	data = json.loads(path.read_text(encoding="utf-8"))
	if not isinstance(data, dict):
		raise ValueError(f"module registry '{path}' must be a JSON object")
	modules = data.get("modules")
	if not isinstance(modules, list):
		raise ValueError(f"module registry '{path}' must contain a 'modules' list")
	root = path.parent
	return ModuleRegistry(_decode_module(entry, root) for entry in modules)
