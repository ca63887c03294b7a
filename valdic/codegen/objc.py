# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Objective-C emission for types without members.

Single-file codegen modules collapse every generated type of a module into
`<IosModuleName>.h` / `<IosModuleName>.m`, so the sources produced here use
those names as grouping keys and `<IosModuleName>` as their output directory.
"""

from __future__ import annotations

import re

from valdic.modules.info import IosLanguage, ModuleInfo
from valdic.pipeline.items import File, NativeSource

from .generator import GeneratorError, TypeKind

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


class ObjcEmptyTypeGenerator:
	def emit_empty_type(
		self,
		name: str,
		module: ModuleInfo,
		kind: TypeKind,
		language: IosLanguage,
	) -> list[NativeSource]:
		if language is not IosLanguage.OBJC:
			raise GeneratorError(f"cannot emit Objective-C sources for language '{language.value}'")
		prefix = module.ios_module_name
		type_name = f"{prefix}{name}"
		if not _IDENTIFIER.match(type_name):
			raise GeneratorError(f"'{type_name}' is not a valid Objective-C identifier")

		header_name = f"{prefix}.h"
		impl_name = f"{prefix}.m"
		header = "\n".join(
			[
				"#import <Foundation/Foundation.h>",
				"",
				"NS_ASSUME_NONNULL_BEGIN",
				"",
				_declaration(type_name, kind),
				"",
				"NS_ASSUME_NONNULL_END",
				"",
			]
		)
		impl_lines = [f'#import "{header_name}"', ""]
		if kind is TypeKind.CLASS:
			impl_lines += [f"@implementation {type_name}", "@end", ""]
		return [
			NativeSource(
				filename=f"{type_name}.h",
				file=File.from_string(header),
				grouping_key=header_name,
				relative_path=prefix,
			),
			NativeSource(
				filename=f"{type_name}.m",
				file=File.from_string("\n".join(impl_lines)),
				grouping_key=impl_name,
				relative_path=prefix,
			),
		]


def _declaration(type_name: str, kind: TypeKind) -> str:
	if kind is TypeKind.CLASS:
		return f"@interface {type_name} : NSObject\n@end"
	if kind is TypeKind.INTERFACE:
		return f"@protocol {type_name} <NSObject>\n@end"
	return f"typedef NS_ENUM(NSInteger, {type_name}) {{\n\t{type_name}None = 0,\n}};"
