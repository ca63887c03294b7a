# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
[NativeSource] -> [NativeSource]: collapse generated native sources per module.

Modules with single-file codegen get one output file per
(module, platform, grouping key) instead of one file per generated type.
For every pass the processor:

1) selects native sources of eligible modules,
2) unions them with the fragments remembered from earlier passes,
3) groups them into buckets, orders each bucket by local dependencies,
4) merges each bucket with the merger for its output language,
5) synthesizes empty placeholders for filtered builds.

Failures are attached to items (one error item per failed bucket); the pass
itself never raises for them.
"""

from __future__ import annotations

import logging
from typing import Sequence

from valdic.codegen.generator import NativeCodeGenerator
from valdic.codegen.objc import ObjcEmptyTypeGenerator
from valdic.core.errors import CompilerError
from valdic.modules.config import CompilerConfig, ProjectConfig
from valdic.modules.info import ModuleInfo
from valdic.modules.registry import ModuleRegistry, UnknownModuleError
from valdic.pipeline.items import (
	CompilationItem,
	CompilationItems,
	File,
	NativeSource,
	OutputTarget,
	SelectedItem,
)

from .native_cache import NativeSourceCache
from .native_grouping import BucketKey, group_by_module, group_into_buckets
from .native_mergers import FileAndContent, merge_native_sources, resolve_merge_kind
from .native_ordering import schedule_native_sources
from .native_placeholders import generate_empty_sources_if_needed

logger = logging.getLogger(__name__)


def _path_label(path: str | None) -> str:
	return path if path is not None else "<null>"


class CombineNativeSourcesProcessor:
	def __init__(
		self,
		compiler_config: CompilerConfig,
		project_config: ProjectConfig,
		registry: ModuleRegistry,
		generator: NativeCodeGenerator | None = None,
		cache: NativeSourceCache | None = None,
	) -> None:
		self.compiler_config = compiler_config
		self.project_config = project_config
		self.registry = registry
		self.generator: NativeCodeGenerator = generator if generator is not None else ObjcEmptyTypeGenerator()
		self.cache = cache if cache is not None else NativeSourceCache()

	@property
	def description(self) -> str:
		return "Combining Native Sources"

	def should_process_module(self, module: ModuleInfo) -> bool:
		return module.single_file_codegen and self.compiler_config.allows_module(module.name)

	def _select(self, item: CompilationItem) -> NativeSource | None:
		if isinstance(item.kind, NativeSource) and self.should_process_module(item.module):
			return item.kind
		return None

	def process(self, items: CompilationItems) -> CompilationItems:
		return items.select(self._select).transform_all(self.combine_native_sources)

	def combine_native_sources(self, selected: list[SelectedItem[NativeSource]]) -> list[CompilationItem]:
		selected_by_module = group_by_module(selected)
		output: list[CompilationItem] = []

		for module, module_sources in selected_by_module.items():
			all_sources = self.cache.merge(module, module_sources)
			buckets = group_into_buckets(all_sources)
			for key, bucket in buckets.items():
				output.append(self.combine_bucket(module, key, bucket))
			logger.info(
				"combined %d native source(s) of module '%s' into %d file(s)",
				len(all_sources),
				module.name,
				len(buckets),
			)

		# Filtered builds still need one artifact per enabled platform.
		for module_name in sorted(self.compiler_config.only_generate_native_code_for_modules):
			try:
				module = self.registry.lookup(module_name)
			except UnknownModuleError:
				logger.debug("skipping placeholders for unknown module '%s'", module_name)
				continue
			if not module.single_file_codegen:
				continue
			output.extend(
				generate_empty_sources_if_needed(
					module,
					selected_by_module.get(module, []),
					project_config=self.project_config,
					generator=self.generator,
				)
			)

		return output

	def combine_bucket(
		self,
		module: ModuleInfo,
		key: BucketKey,
		bucket: Sequence[SelectedItem[NativeSource]],
	) -> CompilationItem:
		"""Merge one bucket into a single item, or return the error item that stopped it."""
		ordered = schedule_native_sources(bucket)

		relative_path: str | None = None
		path_owner: SelectedItem[NativeSource] | None = None
		files: list[FileAndContent] = []

		for source in ordered:
			if source.data.relative_path != relative_path:
				if path_owner is not None and relative_path is not None:
					return source.item.with_error(self._path_conflict(module, path_owner, source))
				relative_path = source.data.relative_path
				path_owner = source
			try:
				content = source.data.file.read_string()
			except (OSError, UnicodeDecodeError) as err:
				error = CompilerError(
					reason_code="native-source-read-failed",
					message=f"failed to read generated native source '{source.data.filename}': {err}",
					module=module.name,
					filename=source.data.filename,
					relative_path=source.data.relative_path,
					emitted_by=source.item.display_path,
				)
				error.__cause__ = err
				return source.item.with_error(error)
			files.append(FileAndContent(filename=source.data.filename, content=content))

		filename = key.grouping_key
		kind = resolve_merge_kind(filename, (f.filename for f in files))
		content, resolved_path = merge_native_sources(kind, files, relative_path)
		logger.debug(
			"merged %d fragment(s) into '%s' (%s, platform=%s)",
			len(files),
			filename,
			kind.value,
			key.platform.value if key.platform is not None else "-",
		)

		merged = NativeSource(
			filename=filename,
			file=File.from_string(content),
			grouping_key=filename,
			grouping_priority=0,
			relative_path=resolved_path,
		)
		return CompilationItem.generated_from_module(module, merged, key.platform, OutputTarget.ALL)

	@staticmethod
	def _path_conflict(
		module: ModuleInfo,
		owner: SelectedItem[NativeSource],
		conflicting: SelectedItem[NativeSource],
	) -> CompilerError:
		expected = owner.data.relative_path
		got = conflicting.data.relative_path
		return CompilerError(
			reason_code="output-path-conflict",
			message=(
				"Modules with single_file_codegen enabled must have generated files output to the same "
				f"directory or package. Found '{_path_label(expected)}' from '{owner.data.filename}' "
				f"(emitted by '{owner.item.display_path}') vs '{_path_label(got)}' from "
				f"'{conflicting.data.filename}' (emitted by '{conflicting.item.display_path}')"
			),
			module=module.name,
			filename=owner.data.filename,
			relative_path=expected,
			emitted_by=owner.item.display_path,
			conflicting_filename=conflicting.data.filename,
			conflicting_relative_path=got,
			conflicting_emitted_by=conflicting.item.display_path,
		)
