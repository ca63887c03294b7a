# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
`valdic` driver: combine generated native sources from fragment manifests.

Each manifest is one compilation pass. Passes run in order against the same
processor, so later (incremental) passes see fragments remembered from earlier
ones. Only the outputs and diagnostics of the last pass are kept: its
items are written to `<out>/<platform>/<relative_path>/`.

With --json, prints structured diagnostics and an exit_code; otherwise prints
human-readable messages to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path, PurePosixPath

from valdic.core.diagnostics import Diagnostic
from valdic.core.errors import CompilerError
from valdic.modules.config import CompilerConfig, ProjectConfig, load_project_config
from valdic.modules.registry import UnknownModuleError, load_module_registry
from valdic.pipeline.items import CompilationItem, CompilationItems, ItemError, NativeSource
from valdic.pipeline.manifest import load_fragment_manifest
from valdic.pipeline.processor import run_processors
from valdic.processors.combine_native_sources import CombineNativeSourcesProcessor

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="valdic", description="Combine generated native sources per module")
	p.add_argument("manifests", type=Path, nargs="+", help="Fragment manifest(s); each one is a compilation pass")
	p.add_argument("--modules", type=Path, required=True, help="Path to the module registry (JSON)")
	p.add_argument("--project-config", type=Path, default=None, help="Path to the project config (JSON)")
	p.add_argument(
		"--only-generate-native-code-for-module",
		dest="only_modules",
		action="append",
		default=None,
		help="Restrict native codegen to this module (repeatable); listed modules get placeholders",
	)
	p.add_argument("--out", type=Path, required=True, help="Output directory for combined sources")
	p.add_argument("--json", action="store_true", help="Emit machine-readable JSON diagnostics")
	p.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug)")
	return p


def normalize_output_rel_path(path_str: str, *, what: str) -> PurePosixPath:
	p = PurePosixPath(path_str.replace("\\", "/"))
	if p.is_absolute():
		raise ValueError(f"{what} must be a relative path, got: {path_str}")
	if any(part in (".", "..") for part in p.parts):
		raise ValueError(f"{what} must not contain '.' or '..', got: {path_str}")
	return p


def output_path_for(out_dir: Path, item: CompilationItem, source: NativeSource) -> Path:
	platform_dir = item.platform.value if item.platform is not None else "any"
	rel = PurePosixPath()
	if source.relative_path:
		rel = normalize_output_rel_path(source.relative_path, what=f"relative path of '{source.filename}'")
	name = normalize_output_rel_path(source.filename, what="output filename")
	return out_dir / platform_dir / rel / name


def write_output(path: Path, content: str) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	tmp = path.with_name(path.name + f".tmp.{os.getpid()}")
	tmp.write_text(content, encoding="utf-8")
	os.replace(tmp, path)


def _error_diagnostic(item: CompilationItem, error: Exception) -> Diagnostic:
	if isinstance(error, CompilerError):
		return error.to_diagnostic(item.display_path, phase="combine")
	return Diagnostic(message=str(error), phase="combine", file=item.display_path)


def _write_pass_outputs(items: CompilationItems, out_dir: Path) -> list[Diagnostic]:
	diagnostics: list[Diagnostic] = []
	for item in items:
		kind = item.kind
		if isinstance(kind, ItemError):
			diagnostics.append(_error_diagnostic(item, kind.error))
			continue
		if not isinstance(kind, NativeSource):
			continue
		try:
			dest = output_path_for(out_dir, item, kind)
			write_output(dest, kind.file.read_string())
		except (OSError, UnicodeDecodeError, ValueError) as err:
			diagnostics.append(Diagnostic(message=f"failed to write '{kind.filename}': {err}", phase="output", file=item.display_path))
			continue
		logger.debug("wrote %s", dest)
	return diagnostics


def _emit(diagnostics: list[Diagnostic], *, as_json: bool, exit_code: int) -> None:
	if as_json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}))
		return
	for d in diagnostics:
		print(d.format_human(), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)

	level = logging.WARNING
	if args.verbose == 1:
		level = logging.INFO
	elif args.verbose > 1:
		level = logging.DEBUG
	logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

	try:
		registry = load_module_registry(args.modules)
		project_config = load_project_config(args.project_config) if args.project_config is not None else ProjectConfig()
		passes = [load_fragment_manifest(m, registry) for m in args.manifests]
	except UnknownModuleError as err:
		diag = Diagnostic(message=f"unknown module {err}", phase="config", file=str(args.modules))
		_emit([diag], as_json=args.json, exit_code=2)
		return 2
	except (OSError, ValueError) as err:
		_emit([Diagnostic(message=str(err), phase="config")], as_json=args.json, exit_code=2)
		return 2

	processor = CombineNativeSourcesProcessor(
		compiler_config=CompilerConfig.from_module_names(args.only_modules),
		project_config=project_config,
		registry=registry,
	)

	result = CompilationItems([])
	for manifest, items in zip(args.manifests, passes):
		logger.info("pass %s: %d item(s)", manifest, len(items))
		result = run_processors(items, [processor])
	diagnostics = _write_pass_outputs(result, args.out)

	exit_code = 1 if diagnostics else 0
	_emit(diagnostics, as_json=args.json, exit_code=exit_code)
	return exit_code
