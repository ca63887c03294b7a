# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compilation items flowing through the processor pipeline.

Each `CompilationItem` carries exactly one payload (`kind`): a generated
`NativeSource`, a `FinalFile` ready to be written, or an `ItemError`. The
payload union is closed; processors match on it with `isinstance`.

Items are immutable. Processors produce new items with `with_kind` /
`with_error`, which keep the originating location so diagnostics still point
at the file that emitted the item.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Generic, Iterable, Iterator, TypeVar, Union

from valdic.modules.info import ModuleInfo


class Platform(Enum):
	ANDROID = "android"
	IOS = "ios"
	CPP = "cpp"
	WEB = "web"


class OutputTarget(Enum):
	ALL = "all"
	DEBUG = "debug"
	RELEASE = "release"


@dataclass(frozen=True)
class File:
	"""
	Lazily readable file content.

	Exactly one of `text`, `data` or `path` is set. Reading a `path` hits the
	filesystem on every call and may raise `OSError`; undecodable bytes raise
	`UnicodeDecodeError`.
	"""

	text: str | None = None
	data: bytes | None = None
	path: Path | None = None

	@classmethod
	def from_string(cls, text: str) -> "File":
		return cls(text=text)

	@classmethod
	def from_bytes(cls, data: bytes) -> "File":
		return cls(data=data)

	@classmethod
	def from_path(cls, path: Path) -> "File":
		return cls(path=path)

	def read_string(self) -> str:
		if self.text is not None:
			return self.text
		if self.data is not None:
			return self.data.decode("utf-8")
		if self.path is not None:
			return self.path.read_bytes().decode("utf-8")
		return ""


@dataclass(frozen=True)
class NativeSource:
	"""A generated native source fragment (one per generated type)."""

	filename: str
	file: File
	# Fragments sharing a grouping key (and platform) merge into one output file.
	grouping_key: str
	grouping_priority: int = 0
	relative_path: str | None = None
	# Filenames of fragments from the same module that must be emitted first.
	local_dependencies: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class FinalFile:
	output_path: str
	file: File
	platform: Platform | None = None


@dataclass(frozen=True)
class ItemError:
	error: Exception
	original_kind: "ItemKind | None" = None


ItemKind = Union[NativeSource, FinalFile, ItemError]


@dataclass(frozen=True)
class CompilationItem:
	source_path: Path | None
	relative_project_path: str | None
	kind: ItemKind
	module: ModuleInfo
	platform: Platform | None = None
	output_target: OutputTarget = OutputTarget.ALL

	@classmethod
	def generated_from_module(
		cls,
		module: ModuleInfo,
		kind: ItemKind,
		platform: Platform | None,
		output_target: OutputTarget = OutputTarget.ALL,
	) -> "CompilationItem":
		"""Build an item that has no source file of its own (owned by `module`)."""
		return cls(
			source_path=module.base_dir,
			relative_project_path=None,
			kind=kind,
			module=module,
			platform=platform,
			output_target=output_target,
		)

	@property
	def display_path(self) -> str:
		if self.relative_project_path is not None:
			return self.relative_project_path
		if self.source_path is not None:
			return str(self.source_path)
		return "<generated>"

	@property
	def error(self) -> Exception | None:
		if isinstance(self.kind, ItemError):
			return self.kind.error
		return None

	def with_kind(self, kind: ItemKind) -> "CompilationItem":
		return replace(self, kind=kind)

	def with_error(self, error: Exception) -> "CompilationItem":
		return replace(self, kind=ItemError(error=error, original_kind=self.kind))


T = TypeVar("T")


@dataclass(frozen=True)
class SelectedItem(Generic[T]):
	"""An item picked by `CompilationItems.select` together with its extracted payload."""

	item: CompilationItem
	data: T


class CompilationItems:
	"""Ordered, immutable-by-convention collection of compilation items."""

	def __init__(self, items: Iterable[CompilationItem] = ()) -> None:
		self._items: list[CompilationItem] = list(items)

	def __iter__(self) -> Iterator[CompilationItem]:
		return iter(self._items)

	def __len__(self) -> int:
		return len(self._items)

	def __repr__(self) -> str:
		return f"CompilationItems({self._items!r})"

	@property
	def items(self) -> list[CompilationItem]:
		return list(self._items)

	def errors(self) -> list[CompilationItem]:
		return [item for item in self._items if isinstance(item.kind, ItemError)]

	def select(self, fn: Callable[[CompilationItem], T | None]) -> "Selection[T]":
		selected: list[SelectedItem[T]] = []
		untouched: list[CompilationItem] = []
		for item in self._items:
			data = fn(item)
			if data is None:
				untouched.append(item)
			else:
				selected.append(SelectedItem(item=item, data=data))
		return Selection(selected=selected, untouched=untouched)


@dataclass
class Selection(Generic[T]):
	selected: list[SelectedItem[T]]
	untouched: list[CompilationItem]

	def transform_all(
		self,
		fn: Callable[[list[SelectedItem[T]]], Iterable[CompilationItem]],
	) -> CompilationItems:
		"""Replace all selected items with whatever `fn` returns for the whole batch."""
		return CompilationItems([*self.untouched, *fn(list(self.selected))])

	def transform_each(self, fn: Callable[[SelectedItem[T]], CompilationItem]) -> CompilationItems:
		return CompilationItems([*self.untouched, *(fn(s) for s in self.selected)])
