# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Empty stand-in sources for filtered builds.

With `--only-generate-native-code-for-modules`, packaging expects a fixed set
of native artifacts per enabled platform even when a listed module generated
no native code this pass. For each missing artifact an empty source is
synthesized; Objective-C goes through the generator so the boilerplate is
language-correct.
"""

from __future__ import annotations

import logging
from typing import Sequence

from valdic.codegen.generator import GeneratorError, NativeCodeGenerator, TypeKind
from valdic.core.errors import CompilerError
from valdic.modules.config import ProjectConfig
from valdic.modules.info import IosLanguage, ModuleInfo
from valdic.pipeline.items import (
	CompilationItem,
	File,
	ItemError,
	NativeSource,
	OutputTarget,
	Platform,
	SelectedItem,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_TYPE_NAME = "Empty"


def make_empty_source(
	module: ModuleInfo,
	filename: str,
	platform: Platform,
	relative_path: str | None = None,
) -> CompilationItem:
	source = NativeSource(
		filename=filename,
		file=File.from_string(""),
		grouping_key=filename,
		grouping_priority=0,
		relative_path=relative_path,
	)
	return CompilationItem.generated_from_module(module, source, platform, OutputTarget.ALL)


def cpp_output_directory(module: ModuleInfo, project_config: ProjectConfig) -> str:
	if project_config.cpp_import_path_prefix:
		return f"{project_config.cpp_import_path_prefix}{module.name}"
	return module.name


def generate_empty_sources_if_needed(
	module: ModuleInfo,
	existing: Sequence[SelectedItem[NativeSource]],
	*,
	project_config: ProjectConfig,
	generator: NativeCodeGenerator,
) -> list[CompilationItem]:
	"""Return placeholder (or error) items for every enabled platform `existing` lacks."""
	filenames = [s.data.filename for s in existing]

	def has(suffix: str) -> bool:
		return any(name.endswith(suffix) for name in filenames)

	out: list[CompilationItem] = []

	if module.android_codegen_enabled and not has(".kt"):
		out.append(make_empty_source(module, f"{module.name}.kt", Platform.ANDROID))

	if module.ios_codegen_enabled and module.ios_language is IosLanguage.OBJC and not has(".m"):
		out.extend(_objc_placeholders(module, generator))

	if module.ios_codegen_enabled and module.ios_language is IosLanguage.SWIFT and not has(".swift"):
		out.append(make_empty_source(module, f"{module.ios_module_name}.swift", Platform.IOS))

	if module.cpp_codegen_enabled and not has(".cpp"):
		relative_path = cpp_output_directory(module, project_config)
		out.append(make_empty_source(module, f"{module.name}.cpp", Platform.CPP, relative_path))
		out.append(make_empty_source(module, f"{module.name}.hpp", Platform.CPP, relative_path))

	if out:
		logger.debug("synthesized %d placeholder item(s) for module '%s'", len(out), module.name)
	return out


def _objc_placeholders(module: ModuleInfo, generator: NativeCodeGenerator) -> list[CompilationItem]:
	try:
		sources = generator.emit_empty_type(PLACEHOLDER_TYPE_NAME, module, TypeKind.CLASS, IosLanguage.OBJC)
	except (GeneratorError, OSError, ValueError) as err:
		error = CompilerError(
			reason_code="placeholder-generation-failed",
			message=f"failed to generate empty Objective-C sources for module '{module.name}': {err}",
			module=module.name,
		)
		error.__cause__ = err
		return [CompilationItem.generated_from_module(module, ItemError(error=error), Platform.IOS)]

	out: list[CompilationItem] = []
	for source in sources:
		# Each placeholder is already a whole combined file.
		renamed = NativeSource(
			filename=source.grouping_key,
			file=source.file,
			grouping_key=source.grouping_key,
			grouping_priority=source.grouping_priority,
			relative_path=source.relative_path,
		)
		out.append(CompilationItem.generated_from_module(module, renamed, Platform.IOS))
	return out
