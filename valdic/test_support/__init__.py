# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared builders for tests that feed items into pipeline processors.

Keeps test bodies focused on fragment names, dependencies and content rather
than on spelling out `CompilationItem` / `SelectedItem` wiring.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from valdic.modules.info import IosLanguage, ModuleInfo
from valdic.pipeline.items import (
	CompilationItem,
	CompilationItems,
	File,
	NativeSource,
	OutputTarget,
	Platform,
	SelectedItem,
)


def make_module(
	name: str = "my_module",
	*,
	single_file_codegen: bool = True,
	android: bool = False,
	ios: bool = False,
	ios_language: IosLanguage = IosLanguage.OBJC,
	cpp: bool = False,
	ios_module_name: str | None = None,
) -> ModuleInfo:
	return ModuleInfo(
		name=name,
		base_dir=Path("modules") / name,
		single_file_codegen=single_file_codegen,
		android_codegen_enabled=android,
		ios_codegen_enabled=ios,
		ios_language=ios_language,
		cpp_codegen_enabled=cpp,
		ios_module_name_override=ios_module_name,
	)


def make_source(
	filename: str,
	content: str = "",
	*,
	grouping_key: str | None = None,
	priority: int = 0,
	relative_path: str | None = None,
	deps: Iterable[str] = (),
	file: File | None = None,
) -> NativeSource:
	return NativeSource(
		filename=filename,
		file=file if file is not None else File.from_string(content),
		grouping_key=grouping_key if grouping_key is not None else filename,
		grouping_priority=priority,
		relative_path=relative_path,
		local_dependencies=frozenset(deps),
	)


def make_item(
	module: ModuleInfo,
	source: NativeSource,
	platform: Platform | None = Platform.IOS,
	*,
	origin: str | None = None,
) -> CompilationItem:
	"""Wrap `source` as if emitted while compiling `origin` (defaults to `<filename>.tsx`)."""
	origin = origin if origin is not None else f"src/{source.filename}.tsx"
	return CompilationItem(
		source_path=module.base_dir / origin,
		relative_project_path=origin,
		kind=source,
		module=module,
		platform=platform,
		output_target=OutputTarget.ALL,
	)


def make_selected(
	module: ModuleInfo,
	source: NativeSource,
	platform: Platform | None = Platform.IOS,
) -> SelectedItem[NativeSource]:
	return SelectedItem(item=make_item(module, source, platform), data=source)


def native_outputs(items: CompilationItems) -> dict[str, CompilationItem]:
	"""Index the native source items of `items` by output filename."""
	return {item.kind.filename: item for item in items if isinstance(item.kind, NativeSource)}


def read(item: CompilationItem) -> str:
	assert isinstance(item.kind, NativeSource)
	return item.kind.file.read_string()
