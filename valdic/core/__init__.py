# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared diagnostic and error types."""

from .diagnostics import Diagnostic
from .errors import CompilerError

__all__ = ["CompilerError", "Diagnostic"]
