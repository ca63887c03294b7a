# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Hooks back into native code generation used by pipeline processors."""

from .generator import GeneratorError, NativeCodeGenerator, TypeKind
from .objc import ObjcEmptyTypeGenerator

__all__ = ["GeneratorError", "NativeCodeGenerator", "ObjcEmptyTypeGenerator", "TypeKind"]
