# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Incremental native source cache.

Incremental builds only regenerate the fragments of changed types, but a
combined file must still contain every fragment of its bucket. The cache
remembers, per module, the last full set of fragments and fills in whatever
the current pass did not regenerate.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Iterable

from valdic.modules.info import ModuleInfo
from valdic.pipeline.items import NativeSource, SelectedItem

from .native_grouping import BucketKey, bucket_key

logger = logging.getLogger(__name__)


class NativeSourceCache:
	"""
	Thread-safe per-module fragment memory, keyed by `ModuleInfo.identity`.

	Merges for the same module are serialized by a per-module lock; merges for
	different modules never contend beyond the brief lock lookup.
	"""

	def __init__(self) -> None:
		self._entries: dict[tuple[str, Path], list[SelectedItem[NativeSource]]] = {}
		self._locks: dict[tuple[str, Path], threading.Lock] = {}
		self._guard = threading.Lock()

	def _lock_for(self, module: ModuleInfo) -> threading.Lock:
		with self._guard:
			lock = self._locks.get(module.identity)
			if lock is None:
				lock = threading.Lock()
				self._locks[module.identity] = lock
			return lock

	def merge(
		self,
		module: ModuleInfo,
		incoming: Iterable[SelectedItem[NativeSource]],
	) -> list[SelectedItem[NativeSource]]:
		"""
		Union `incoming` with the cached fragments of `module` and store the result.

		Fragments are keyed by (platform, grouping key): an incoming fragment
		replaces any cached one with the same key, cached fragments with keys
		absent from `incoming` are carried forward after the incoming ones.
		"""
		merged = list(incoming)
		incoming_keys: set[BucketKey] = {bucket_key(s) for s in merged}
		with self._lock_for(module):
			carried = [s for s in self._entries.get(module.identity, []) if bucket_key(s) not in incoming_keys]
			merged.extend(carried)
			self._entries[module.identity] = merged
		logger.debug(
			"native source cache for module '%s': %d incoming, %d carried over",
			module.name,
			len(merged) - len(carried),
			len(carried),
		)
		return list(merged)

	def snapshot(self, module: ModuleInfo) -> list[SelectedItem[NativeSource]]:
		with self._lock_for(module):
			return list(self._entries.get(module.identity, []))

	def __len__(self) -> int:
		with self._guard:
			return len(self._entries)
