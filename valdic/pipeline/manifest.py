# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Fragment manifest: the on-disk form of one pass of generated native sources.

	{
	  "fragments": [
	    {
	      "module": "my_module",
	      "platform": "ios",
	      "filename": "SCMyModuleFoo.m",
	      "path": "gen/SCMyModuleFoo.m",
	      "grouping_key": "SCMyModule.m",
	      "grouping_priority": 0,
	      "relative_path": "SCMyModule",
	      "local_dependencies": ["SCMyModuleBase.m"],
	      "source": "src/Foo.tsx"
	    }
	  ]
	}

`path` is relative to the manifest and read lazily; `content` may be given
inline instead. `grouping_key` defaults to `filename`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from valdic.modules.registry import ModuleRegistry

from .items import CompilationItem, CompilationItems, File, NativeSource, OutputTarget, Platform

_FRAGMENT_KEYS = {
	"module",
	"platform",
	"filename",
	"path",
	"content",
	"grouping_key",
	"grouping_priority",
	"relative_path",
	"local_dependencies",
	"source",
}


def _opt_str(entry: dict[str, Any], key: str, where: str) -> str | None:
	value = entry.get(key)
	if value is not None and not isinstance(value, str):
		raise ValueError(f"{where}: '{key}' must be a string")
	return value


def _decode_fragment(entry: Any, root: Path, registry: ModuleRegistry, index: int) -> CompilationItem:
	where = f"fragment #{index}"
	if not isinstance(entry, dict):
		raise ValueError(f"{where} must be an object")
	unknown = sorted(set(entry.keys()) - _FRAGMENT_KEYS)
	if unknown:
		raise ValueError(f"{where} has unknown fields: {', '.join(unknown)}")

	filename = entry.get("filename")
	if not isinstance(filename, str) or not filename:
		raise ValueError(f"{where} missing 'filename'")
	where = f"fragment '{filename}'"

	module_name = entry.get("module")
	if not isinstance(module_name, str):
		raise ValueError(f"{where} missing 'module'")
	module = registry.lookup(module_name)

	platform_s = entry.get("platform")
	try:
		platform = Platform(platform_s) if platform_s is not None else None
	except ValueError as err:
		raise ValueError(f"{where} has unknown platform '{platform_s}'") from err

	path_s = _opt_str(entry, "path", where)
	content = _opt_str(entry, "content", where)
	if (path_s is None) == (content is None):
		raise ValueError(f"{where} must have exactly one of 'path' or 'content'")
	file = File.from_path(root / path_s) if path_s is not None else File.from_string(content or "")

	priority = entry.get("grouping_priority", 0)
	if not isinstance(priority, int) or isinstance(priority, bool):
		raise ValueError(f"{where}: 'grouping_priority' must be an integer")
	deps = entry.get("local_dependencies", [])
	if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
		raise ValueError(f"{where}: 'local_dependencies' must be a list of filenames")

	source = NativeSource(
		filename=filename,
		file=file,
		grouping_key=_opt_str(entry, "grouping_key", where) or filename,
		grouping_priority=priority,
		relative_path=_opt_str(entry, "relative_path", where),
		local_dependencies=frozenset(deps),
	)
	relative_project_path = _opt_str(entry, "source", where)
	return CompilationItem(
		source_path=module.base_dir / relative_project_path if relative_project_path else module.base_dir,
		relative_project_path=relative_project_path,
		kind=source,
		module=module,
		platform=platform,
		output_target=OutputTarget.ALL,
	)


def load_fragment_manifest(path: Path, registry: ModuleRegistry) -> CompilationItems:
	data = json.loads(path.read_text(encoding="utf-8"))
	if not isinstance(data, dict):
		raise ValueError(f"fragment manifest '{path}' must be a JSON object")
	fragments = data.get("fragments")
	if not isinstance(fragments, list):
		raise ValueError(f"fragment manifest '{path}' must contain a 'fragments' list")
	root = path.parent
	return CompilationItems(_decode_fragment(entry, root, registry, idx) for idx, entry in enumerate(fragments))
