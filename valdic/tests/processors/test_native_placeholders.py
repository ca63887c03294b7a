# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from valdic.codegen.generator import GeneratorError
from valdic.codegen.objc import ObjcEmptyTypeGenerator
from valdic.core.errors import CompilerError
from valdic.modules.config import CompilerConfig, ProjectConfig
from valdic.modules.info import IosLanguage
from valdic.modules.registry import ModuleRegistry
from valdic.pipeline.items import CompilationItems, ItemError, NativeSource, Platform
from valdic.processors.combine_native_sources import CombineNativeSourcesProcessor
from valdic.processors.native_placeholders import cpp_output_directory, generate_empty_sources_if_needed
from valdic.test_support import make_item, make_module, make_selected, make_source, native_outputs, read


class FailingGenerator:
	def emit_empty_type(self, name, module, kind, language):
		raise GeneratorError("boom")


def _summary(items) -> list[tuple[str, str, str | None]]:
	return sorted((i.platform.value, i.kind.filename, i.kind.relative_path) for i in items)


def test_all_platforms_get_placeholders() -> None:
	module = make_module("mod", android=True, ios=True, cpp=True, ios_module_name="SCMod")
	out = generate_empty_sources_if_needed(
		module,
		[],
		project_config=ProjectConfig(cpp_import_path_prefix="valdi/"),
		generator=ObjcEmptyTypeGenerator(),
	)
	assert _summary(out) == [
		("android", "mod.kt", None),
		("cpp", "mod.cpp", "valdi/mod"),
		("cpp", "mod.hpp", "valdi/mod"),
		("ios", "SCMod.h", "SCMod"),
		("ios", "SCMod.m", "SCMod"),
	]
	for item in out:
		assert item.kind.grouping_key == item.kind.filename
		assert item.kind.grouping_priority == 0
		assert item.source_path == module.base_dir


def test_empty_placeholders_have_no_content() -> None:
	module = make_module("mod", android=True)
	[item] = generate_empty_sources_if_needed(module, [], project_config=ProjectConfig(), generator=ObjcEmptyTypeGenerator())
	assert read(item) == ""


def test_objc_placeholder_comes_from_generator() -> None:
	module = make_module("mod", ios=True, ios_module_name="SCMod")
	out = generate_empty_sources_if_needed(module, [], project_config=ProjectConfig(), generator=ObjcEmptyTypeGenerator())
	by_name = {i.kind.filename: read(i) for i in out}
	assert "@interface SCModEmpty : NSObject" in by_name["SCMod.h"]
	assert "@implementation SCModEmpty" in by_name["SCMod.m"]


def test_swift_placeholder_uses_ios_module_name() -> None:
	module = make_module("mod", ios=True, ios_language=IosLanguage.SWIFT, ios_module_name="SCMod")
	out = generate_empty_sources_if_needed(module, [], project_config=ProjectConfig(), generator=FailingGenerator())
	assert _summary(out) == [("ios", "SCMod.swift", None)]


def test_cpp_directory_without_prefix() -> None:
	assert cpp_output_directory(make_module("mod"), ProjectConfig()) == "mod"
	assert cpp_output_directory(make_module("mod"), ProjectConfig(cpp_import_path_prefix="x/")) == "x/mod"


def test_existing_fragments_suppress_placeholders() -> None:
	module = make_module("mod", android=True, ios=True, cpp=True)
	existing = [
		make_selected(module, make_source("A.kt"), Platform.ANDROID),
		make_selected(module, make_source("A.m"), Platform.IOS),
		make_selected(module, make_source("A.cpp"), Platform.CPP),
	]
	out = generate_empty_sources_if_needed(module, existing, project_config=ProjectConfig(), generator=FailingGenerator())
	assert out == []


def test_generator_failure_becomes_error_item() -> None:
	module = make_module("mod", ios=True)
	[item] = generate_empty_sources_if_needed(module, [], project_config=ProjectConfig(), generator=FailingGenerator())
	assert isinstance(item.kind, ItemError)
	err = item.kind.error
	assert isinstance(err, CompilerError)
	assert err.reason_code == "placeholder-generation-failed"
	assert isinstance(err.__cause__, GeneratorError)
	assert item.platform is Platform.IOS
	assert item.source_path == module.base_dir


def _processor(registry: ModuleRegistry, only: list[str], generator=None) -> CombineNativeSourcesProcessor:
	return CombineNativeSourcesProcessor(
		compiler_config=CompilerConfig.from_module_names(only),
		project_config=ProjectConfig(),
		registry=registry,
		generator=generator,
	)


def test_filtered_build_synthesizes_for_listed_modules_only() -> None:
	listed = make_module("listed", android=True)
	unlisted = make_module("unlisted", android=True)
	opted_out = make_module("opted_out", android=True, single_file_codegen=False)
	processor = _processor(ModuleRegistry([listed, unlisted, opted_out]), ["listed", "opted_out", "missing"])

	out = processor.process(CompilationItems())
	assert set(native_outputs(out)) == {"listed.kt"}


def test_no_placeholders_without_allow_list() -> None:
	module = make_module("mod", android=True)
	processor = _processor(ModuleRegistry([module]), [])
	assert len(processor.process(CompilationItems())) == 0


def test_placeholders_only_fill_missing_platforms() -> None:
	module = make_module("mod", android=True, cpp=True)
	processor = _processor(ModuleRegistry([module]), ["mod"])
	items = CompilationItems([make_item(module, make_source("A.kt", "package demo\n\nclass A", grouping_key="mod.kt"), Platform.ANDROID)])
	outputs = native_outputs(processor.process(items))

	assert set(outputs) == {"mod.kt", "mod.cpp", "mod.hpp"}
	assert "class A" in read(outputs["mod.kt"])
	assert isinstance(outputs["mod.cpp"].kind, NativeSource)
