# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from valdic.modules.info import ModuleInfo
from valdic.pipeline.items import NativeSource, Platform, SelectedItem


@dataclass(frozen=True)
class BucketKey:
	"""Identifies one combined output file within a module."""

	platform: Platform | None
	grouping_key: str


def bucket_key(source: SelectedItem[NativeSource]) -> BucketKey:
	return BucketKey(platform=source.item.platform, grouping_key=source.data.grouping_key)


def group_by_module(
	sources: Iterable[SelectedItem[NativeSource]],
) -> dict[ModuleInfo, list[SelectedItem[NativeSource]]]:
	out: dict[ModuleInfo, list[SelectedItem[NativeSource]]] = {}
	for source in sources:
		out.setdefault(source.item.module, []).append(source)
	return out


def group_into_buckets(
	sources: Iterable[SelectedItem[NativeSource]],
) -> dict[BucketKey, list[SelectedItem[NativeSource]]]:
	out: dict[BucketKey, list[SelectedItem[NativeSource]]] = {}
	for source in sources:
		out.setdefault(bucket_key(source), []).append(source)
	return out
