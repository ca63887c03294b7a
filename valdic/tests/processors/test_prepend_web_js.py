# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from pathlib import Path

import pytest

from valdic.core.errors import CompilerError
from valdic.pipeline.items import CompilationItem, CompilationItems, File, FinalFile, Platform
from valdic.processors.prepend_web_js import PrependWebJsProcessor, module_path_for
from valdic.test_support import make_item, make_module, make_source

MODULE = make_module("web_mod")


def _web_item(output_path: str, content: str, origin: str | None = "src/Page.tsx", platform=Platform.WEB, file=None):
	return CompilationItem(
		source_path=MODULE.base_dir,
		relative_project_path=origin,
		kind=FinalFile(output_path=output_path, file=file or File.from_string(content), platform=platform),
		module=MODULE,
		platform=platform,
	)


@pytest.mark.parametrize(
	("path", "expected"),
	[
		("web_mod/src/Page.tsx", "web_mod/src/Page"),
		("web_mod/src/util.ts", "web_mod/src/util"),
		("web_mod/src/plain.js", "web_mod/src/plain.js"),
	],
)
def test_module_path_strips_typescript_extension(path: str, expected: str) -> None:
	assert module_path_for(path) == expected


def test_web_script_gets_module_setup_and_custom_require() -> None:
	item = _web_item("web_mod/src/Page.js", 'const x = require("./x");\n', origin="web_mod/src/Page.tsx")
	[out] = list(PrependWebJsProcessor().process(CompilationItems([item])))

	assert isinstance(out.kind, FinalFile)
	assert out.kind.file.read_string() == (
		'module.path = "web_mod/src/Page";\n'
		'var customRequire = globalThis.moduleLoader.resolveRequire("web_mod/src/Page");\n'
		'const x = customRequire("./x");\n'
	)
	assert out.relative_project_path == item.relative_project_path


def test_bootstrap_scripts_are_left_alone() -> None:
	item = _web_item("out/valdi_core/src/ModuleLoader.js", "require('x')")
	assert list(PrependWebJsProcessor().process(CompilationItems([item]))) == [item]


def test_non_web_and_non_js_items_pass_through() -> None:
	ios = _web_item("out/Page.js", "require('x')", platform=Platform.IOS)
	css = _web_item("out/Page.css", "body {}")
	native = make_item(MODULE, make_source("A.m"))
	items = CompilationItems([ios, css, native])
	assert list(PrependWebJsProcessor().process(items)) == [ios, css, native]


def test_unreadable_script_becomes_error(tmp_path: Path) -> None:
	item = _web_item("out/Page.js", "", file=File.from_path(tmp_path / "gone.js"))
	[out] = list(PrependWebJsProcessor().process(CompilationItems([item])))
	assert isinstance(out.error, CompilerError)
	assert out.error.reason_code == "web-js-read-failed"
