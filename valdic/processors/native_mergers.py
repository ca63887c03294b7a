# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Language-specific text merging of native source fragments.

None of these mergers parse the target language. Each one applies the
smallest line-level rewrite that keeps a concatenation of generated fragments
compilable:

- GENERIC: plain concatenation with a banner per fragment.
- OBJC: concatenation, dropping repeated definitions of generated trampoline
  functions (emitted once per type, but defined once per file).
- CPP_HEADER: a single `#pragma once` at the top; fragment-local ones removed.
- KOTLIN: `package`/`import` headers deduplicated and hoisted to the top.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence


class MergeKind(Enum):
	KOTLIN = "kotlin"
	CPP_HEADER = "cpp_header"
	OBJC = "objc"
	GENERIC = "generic"


@dataclass(frozen=True)
class FileAndContent:
	filename: str
	content: str


PRAGMA_ONCE = "#pragma once"

# Deliberately narrow: only signatures the Objective-C generator emits for
# trampolines are recognized, so hand-written code is never dropped.
# A prototype line (no braces) counts as a complete one-line block and claims
# the name, so a later definition of the same trampoline is dropped.
TRAMPOLINE_SIGNATURE_PREFIXES = (
	"static SCValdiFieldValue ",
	"static id ",
)
TRAMPOLINE_NAME_MARKERS = (
	"SCValdiFunctionInvoke",
	"SCValdiBlockCreate",
)

_IDENTIFIER_RUN = re.compile(r"\w+")


def resolve_merge_kind(output_filename: str, input_filenames: Iterable[str]) -> MergeKind:
	names = list(input_filenames)
	if any(name.endswith(".kt") for name in names):
		return MergeKind.KOTLIN
	if any(name.endswith(".hpp") for name in names):
		return MergeKind.CPP_HEADER
	if output_filename.endswith(".m"):
		return MergeKind.OBJC
	return MergeKind.GENERIC


def merge_native_sources(
	kind: MergeKind,
	files: Sequence[FileAndContent],
	relative_path: str | None,
) -> tuple[str, str | None]:
	"""Merge `files` (already in emission order) and return `(content, relative_path)`."""
	if kind is MergeKind.KOTLIN:
		# The package declaration decides where Kotlin sources land.
		return merge_kotlin_sources(files), None
	if kind is MergeKind.CPP_HEADER:
		return merge_cpp_headers(files), relative_path
	if kind is MergeKind.OBJC:
		return merge_objc_sources(files), relative_path
	return merge_any_sources(files), relative_path


def file_banner(filename: str) -> str:
	return f"//\n// {filename}\n//\n\n"


def merge_any_sources(files: Sequence[FileAndContent]) -> str:
	parts: list[str] = []
	for f in files:
		parts.append(file_banner(f.filename))
		parts.append(f.content)
		parts.append("\n")
	return "".join(parts)


def merge_objc_sources(files: Sequence[FileAndContent]) -> str:
	emitted: set[str] = set()
	parts: list[str] = []
	for f in files:
		parts.append(file_banner(f.filename))
		parts.append(deduplicate_trampolines(f.content, emitted))
		parts.append("\n")
	return "".join(parts)


def trampoline_function_name(line: str) -> str | None:
	"""
	Return the trampoline name if `line` opens a trampoline definition.

	e.g. `static id SCValdiBlockCreateODDB_v(...) {` -> `SCValdiBlockCreateODDB_v`.
	"""
	for prefix in TRAMPOLINE_SIGNATURE_PREFIXES:
		if not line.startswith(prefix):
			continue
		after_prefix = line[len(prefix):]
		for marker in TRAMPOLINE_NAME_MARKERS:
			if not after_prefix.startswith(marker):
				continue
			match = _IDENTIFIER_RUN.match(after_prefix)
			if match:
				return match.group(0)
	return None


def deduplicate_trampolines(content: str, emitted: set[str]) -> str:
	"""
	Drop trampoline blocks whose name is already in `emitted`.

	A block spans from the signature line until the running brace depth is
	back to zero, so nested braces inside the body are kept together. Names of
	kept blocks are added to `emitted`.
	"""
	lines = content.split("\n")
	result: list[str] = []
	i = 0
	while i < len(lines):
		name = trampoline_function_name(lines[i])
		if name is None:
			result.append(lines[i])
			i += 1
			continue

		depth = 0
		j = i
		while j < len(lines):
			current = lines[j]
			depth += current.count("{") - current.count("}")
			j += 1
			if depth == 0:
				break

		if name not in emitted:
			emitted.add(name)
			result.extend(lines[i:j])
		i = j
	return "\n".join(result)


def merge_cpp_headers(files: Sequence[FileAndContent]) -> str:
	parts: list[str] = [PRAGMA_ONCE, "\n"]
	for f in files:
		parts.append(file_banner(f.filename))
		for line in f.content.split("\n"):
			if line == PRAGMA_ONCE:
				continue
			parts.append(line)
			parts.append("\n")
		parts.append("\n")
	return "".join(parts)


def _is_kotlin_header_line(line: str) -> bool:
	return line.startswith("package ") or line.startswith("import ") or not line


def merge_kotlin_sources(files: Sequence[FileAndContent]) -> str:
	"""
	Rebuild one .kt file from many, hoisting package and import statements.

		package demo          package demo
		import B              import B
		                      import C
		class A               class B

	becomes

		package demo
		import B
		import C

		class A
		class B

	(with a banner comment before each class body).
	"""
	header: dict[str, None] = {}
	body: list[str] = []
	for f in files:
		in_body = False
		for line in f.content.replace("\r\n", "\n").split("\n"):
			if not in_body:
				if _is_kotlin_header_line(line):
					if line:
						header.setdefault(line, None)
					continue
				in_body = True
				body.append(file_banner(f.filename))
			body.append(line)
			body.append("\n")
	header_text = "".join(f"{line}\n" for line in header)
	return header_text + "\n" + "".join(body)
