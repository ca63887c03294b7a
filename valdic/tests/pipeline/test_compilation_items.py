# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from valdic.pipeline.items import CompilationItem, CompilationItems, File, ItemError, NativeSource, Platform
from valdic.pipeline.processor import run_processors
from valdic.test_support import make_item, make_module, make_source

MODULE = make_module()


def test_file_variants_read_as_text(tmp_path: Path) -> None:
	p = tmp_path / "a.m"
	p.write_text("from disk", encoding="utf-8")
	assert File.from_string("text").read_string() == "text"
	assert File.from_bytes("bytes é".encode("utf-8")).read_string() == "bytes é"
	assert File.from_path(p).read_string() == "from disk"
	assert File().read_string() == ""


def test_file_read_errors_surface(tmp_path: Path) -> None:
	with pytest.raises(FileNotFoundError):
		File.from_path(tmp_path / "missing").read_string()
	with pytest.raises(UnicodeDecodeError):
		File.from_bytes(b"\xff").read_string()


def test_with_error_keeps_identity_and_original_kind() -> None:
	item = make_item(MODULE, make_source("A.m"))
	err = ValueError("bad")
	failed = item.with_error(err)
	assert failed.relative_project_path == item.relative_project_path
	assert failed.source_path == item.source_path
	assert failed.kind == ItemError(error=err, original_kind=item.kind)
	assert failed.error is err
	assert item.error is None


def test_with_kind_replaces_payload_only() -> None:
	item = make_item(MODULE, make_source("A.m"))
	new_source = make_source("B.m")
	changed = item.with_kind(new_source)
	assert changed.kind == new_source
	assert changed.platform is item.platform
	assert changed.module == item.module


def test_generated_item_points_at_module() -> None:
	item = CompilationItem.generated_from_module(MODULE, make_source("A.m"), Platform.IOS)
	assert item.source_path == MODULE.base_dir
	assert item.relative_project_path is None
	assert item.display_path == str(MODULE.base_dir)


def test_select_and_transform_all_keeps_untouched_first() -> None:
	a = make_item(MODULE, make_source("A.m"))
	b = make_item(MODULE, make_source("B.h"))
	c = make_item(MODULE, make_source("C.m"))
	items = CompilationItems([a, b, c])

	def pick(item: CompilationItem) -> NativeSource | None:
		return item.kind if item.kind.filename.endswith(".m") else None

	seen: list[str] = []

	def combine(selected):
		seen.extend(s.data.filename for s in selected)
		return [make_item(MODULE, make_source("Merged.m"))]

	out = items.select(pick).transform_all(combine)
	assert seen == ["A.m", "C.m"]
	assert [i.kind.filename for i in out] == ["B.h", "Merged.m"]


def test_transform_each_maps_selected_items() -> None:
	items = CompilationItems([make_item(MODULE, make_source("A.m")), make_item(MODULE, make_source("B.h"))])
	out = items.select(lambda i: i.kind if i.kind.filename.endswith(".h") else None).transform_each(
		lambda s: s.item.with_error(ValueError(s.data.filename))
	)
	assert [i.error is not None for i in out] == [False, True]
	assert len(out.errors()) == 1


class _Rename:
	def __init__(self, suffix: str) -> None:
		self.suffix = suffix

	@property
	def description(self) -> str:
		return f"rename {self.suffix}"

	def process(self, items: CompilationItems) -> CompilationItems:
		return items.select(lambda i: i.kind).transform_each(
			lambda s: s.item.with_kind(make_source(s.data.filename + self.suffix))
		)


def test_run_processors_applies_in_order() -> None:
	items = CompilationItems([make_item(MODULE, make_source("A"))])
	out = run_processors(items, [_Rename(".x"), _Rename(".y")])
	assert [i.kind.filename for i in out] == ["A.x.y"]
