# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Compilation items and the processor protocol that transforms them."""

from .items import (
	CompilationItem,
	CompilationItems,
	File,
	FinalFile,
	ItemError,
	NativeSource,
	OutputTarget,
	Platform,
	SelectedItem,
	Selection,
)
from .processor import CompilationProcessor, run_processors

__all__ = [
	"CompilationItem",
	"CompilationItems",
	"CompilationProcessor",
	"File",
	"FinalFile",
	"ItemError",
	"NativeSource",
	"OutputTarget",
	"Platform",
	"SelectedItem",
	"Selection",
	"run_processors",
]
