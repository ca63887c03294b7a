# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging
from typing import Iterable, Protocol

from .items import CompilationItems

logger = logging.getLogger(__name__)


class CompilationProcessor(Protocol):
	"""
	One stage of the compilation pipeline.

	`process` must not raise for item-level failures; it attaches them to the
	affected items instead and returns the full transformed collection.
	"""

	@property
	def description(self) -> str:
		...

	def process(self, items: CompilationItems) -> CompilationItems:
		...


def run_processors(items: CompilationItems, processors: Iterable[CompilationProcessor]) -> CompilationItems:
	for processor in processors:
		logger.info("%s (%d items)", processor.description, len(items))
		items = processor.process(items)
	return items
