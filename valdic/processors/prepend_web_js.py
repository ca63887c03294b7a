# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
[FinalFile(web, *.js)] -> [FinalFile]: wire compiled web scripts to the module loader.

Every web script gets `module.path` set and its `require(` calls routed
through `customRequire`, which resolves paths relative to the script's own
module path. Bootstrap scripts that run before the module loader exists are
left alone.
"""

from __future__ import annotations

from valdic.core.errors import CompilerError
from valdic.pipeline.items import CompilationItem, CompilationItems, File, FinalFile, Platform, SelectedItem

EXCLUDED_FILES = (
	"web_renderer/src/ValdiWebRenderer.js",
	"web_renderer/src/ValdiWebRuntime.js",
	"valdi_core/src/Init.js",
	"valdi_core/src/ModuleLoader.js",
)


def module_path_for(relative_project_path: str) -> str:
	"""Compiled files are .js, so the loader knows modules without their TS extension."""
	if relative_project_path.endswith(".tsx"):
		return relative_project_path[: -len(".tsx")]
	if relative_project_path.endswith(".ts"):
		return relative_project_path[: -len(".ts")]
	return relative_project_path


def prepend_module_setup(contents: str, module_path: str) -> str:
	# TypeScript's commonjs output already lowers import() to require(), so
	# rewriting require( covers dynamic imports too.
	contents = contents.replace("require(", "customRequire(")
	prefix = (
		f'module.path = "{module_path}";\n'
		f'var customRequire = globalThis.moduleLoader.resolveRequire("{module_path}");\n'
	)
	return prefix + contents


class PrependWebJsProcessor:
	@property
	def description(self) -> str:
		return "Modify js files for web"

	@staticmethod
	def _select(item: CompilationItem) -> FinalFile | None:
		kind = item.kind
		if isinstance(kind, FinalFile) and kind.platform is Platform.WEB and kind.output_path.endswith(".js"):
			return kind
		return None

	def process(self, items: CompilationItems) -> CompilationItems:
		return items.select(self._select).transform_each(self.transform)

	def transform(self, selected: SelectedItem[FinalFile]) -> CompilationItem:
		item = selected.item
		final_file = selected.data
		if any(name in final_file.output_path for name in EXCLUDED_FILES):
			return item

		module_path = module_path_for(item.relative_project_path or final_file.output_path)
		try:
			contents = final_file.file.read_string()
		except (OSError, UnicodeDecodeError) as err:
			error = CompilerError(
				reason_code="web-js-read-failed",
				message=f"failed to read web script '{final_file.output_path}': {err}",
				module=item.module.name,
				filename=final_file.output_path,
			)
			error.__cause__ = err
			return item.with_error(error)

		data = prepend_module_setup(contents, module_path).encode("utf-8")
		return item.with_kind(
			FinalFile(output_path=final_file.output_path, file=File.from_bytes(data), platform=Platform.WEB)
		)
