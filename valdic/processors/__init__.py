# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Pipeline processors."""

from .combine_native_sources import CombineNativeSourcesProcessor
from .native_cache import NativeSourceCache
from .native_mergers import MergeKind, merge_native_sources, resolve_merge_kind
from .native_ordering import schedule_native_sources
from .prepend_web_js import PrependWebJsProcessor

__all__ = [
	"CombineNativeSourcesProcessor",
	"MergeKind",
	"NativeSourceCache",
	"PrependWebJsProcessor",
	"merge_native_sources",
	"resolve_merge_kind",
	"schedule_native_sources",
]
