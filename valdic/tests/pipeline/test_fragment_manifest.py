# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from valdic.modules.registry import ModuleRegistry, UnknownModuleError
from valdic.pipeline.items import NativeSource, Platform
from valdic.pipeline.manifest import load_fragment_manifest
from valdic.test_support import make_module

MODULE = make_module("mod")
REGISTRY = ModuleRegistry([MODULE])


def _write(path: Path, obj) -> Path:
	path.write_text(json.dumps(obj), encoding="utf-8")
	return path


def test_manifest_decodes_fragments(tmp_path: Path) -> None:
	(tmp_path / "gen").mkdir()
	(tmp_path / "gen" / "A.m").write_text("int a;", encoding="utf-8")
	manifest = _write(
		tmp_path / "pass.json",
		{
			"fragments": [
				{
					"module": "mod",
					"platform": "ios",
					"filename": "A.m",
					"path": "gen/A.m",
					"grouping_key": "Mod.m",
					"grouping_priority": 2,
					"relative_path": "Mod",
					"local_dependencies": ["B.m"],
					"source": "src/A.tsx",
				},
				{"module": "mod", "platform": "android", "filename": "B.kt", "content": "class B"},
			]
		},
	)
	[a, b] = list(load_fragment_manifest(manifest, REGISTRY))

	assert isinstance(a.kind, NativeSource)
	assert a.kind.grouping_key == "Mod.m"
	assert a.kind.grouping_priority == 2
	assert a.kind.relative_path == "Mod"
	assert a.kind.local_dependencies == frozenset({"B.m"})
	assert a.kind.file.read_string() == "int a;"
	assert a.platform is Platform.IOS
	assert a.relative_project_path == "src/A.tsx"
	assert a.module == MODULE

	assert b.kind.grouping_key == "B.kt"
	assert b.kind.file.read_string() == "class B"
	assert b.platform is Platform.ANDROID


def test_manifest_content_is_read_lazily(tmp_path: Path) -> None:
	manifest = _write(tmp_path / "p.json", {"fragments": [{"module": "mod", "filename": "A.m", "path": "later.m"}]})
	[item] = list(load_fragment_manifest(manifest, REGISTRY))
	(tmp_path / "later.m").write_text("late", encoding="utf-8")
	assert item.kind.file.read_string() == "late"


@pytest.mark.parametrize(
	("fragment", "match"),
	[
		({"module": "mod", "filename": "A.m"}, "exactly one of"),
		({"module": "mod", "filename": "A.m", "content": "", "path": "x"}, "exactly one of"),
		({"module": "mod", "filename": "A.m", "content": "", "platform": "tv"}, "unknown platform"),
		({"module": "mod", "filename": "A.m", "content": "", "grouping_priority": "1"}, "grouping_priority"),
		({"module": "mod", "filename": "A.m", "content": "", "local_dependencies": "B.m"}, "local_dependencies"),
		({"module": "mod", "filename": "A.m", "content": "", "extra": 1}, "unknown fields"),
		({"module": "mod", "content": ""}, "missing 'filename'"),
	],
)
def test_manifest_rejects_malformed_fragments(tmp_path: Path, fragment, match: str) -> None:
	manifest = _write(tmp_path / "p.json", {"fragments": [fragment]})
	with pytest.raises(ValueError, match=match):
		load_fragment_manifest(manifest, REGISTRY)


def test_manifest_rejects_unknown_module(tmp_path: Path) -> None:
	manifest = _write(tmp_path / "p.json", {"fragments": [{"module": "nope", "filename": "A.m", "content": ""}]})
	with pytest.raises(UnknownModuleError):
		load_fragment_manifest(manifest, REGISTRY)


def test_manifest_requires_fragment_list(tmp_path: Path) -> None:
	with pytest.raises(ValueError, match="'fragments' list"):
		load_fragment_manifest(_write(tmp_path / "p.json", {"items": []}), REGISTRY)
