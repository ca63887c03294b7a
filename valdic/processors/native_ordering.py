# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Deterministic emission order for the fragments of one combined file.

Fragments may declare local dependencies (by filename) on other fragments of
the same module, e.g. a base type that must precede its subtypes. Ordering is
a Kahn topological sort where every tie is broken by
`(grouping_priority, filename)`:

- dependencies naming a file outside the bucket are ignored;
- the set of ready fragments is kept sorted, new ready fragments are inserted
  at their lower-bound position;
- if the sort stalls (a dependency cycle), every remaining fragment is
  appended in `(grouping_priority, filename)` order.

The result is a total order that is identical for identical inputs,
regardless of input order, and always covers every fragment.
"""

from __future__ import annotations

import bisect
import logging
from operator import attrgetter
from typing import Callable, Sequence, TypeVar

from valdic.pipeline.items import NativeSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


def ordering_key(source: NativeSource) -> tuple[int, str]:
	return (source.grouping_priority, source.filename)


def schedule_native_sources(
	entries: Sequence[T],
	native_source: Callable[[T], NativeSource] = attrgetter("data"),
) -> list[T]:
	"""
	Return `entries` in dependency order.

	`native_source` extracts the fragment from an entry; by default entries are
	`SelectedItem[NativeSource]`.
	"""
	if not entries:
		return []
	sources = [native_source(e) for e in entries]
	index_by_filename = {s.filename: idx for idx, s in enumerate(sources)}

	in_degree = [0] * len(sources)
	dependents: dict[str, list[int]] = {}
	for idx, source in enumerate(sources):
		# Sorted so the order dependents are released in never depends on set iteration.
		for dep in sorted(source.local_dependencies):
			if dep in index_by_filename:
				in_degree[idx] += 1
			dependents.setdefault(dep, []).append(idx)

	def key(idx: int) -> tuple[int, str]:
		return ordering_key(sources[idx])

	available = sorted((idx for idx in range(len(sources)) if in_degree[idx] == 0), key=key)
	processed = [False] * len(sources)
	result: list[T] = []

	while available:
		selected = available.pop(0)
		processed[selected] = True
		result.append(entries[selected])
		for dep_idx in dependents.get(sources[selected].filename, []):
			if processed[dep_idx] or in_degree[dep_idx] <= 0:
				continue
			in_degree[dep_idx] -= 1
			if in_degree[dep_idx] == 0:
				bisect.insort_left(available, dep_idx, key=key)

	if len(result) < len(sources):
		remaining = sorted((idx for idx in range(len(sources)) if not processed[idx]), key=key)
		logger.warning(
			"dependency cycle between native sources %s; falling back to priority/filename order",
			", ".join(sources[idx].filename for idx in remaining),
		)
		result.extend(entries[idx] for idx in remaining)

	return result
