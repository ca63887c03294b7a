# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Module descriptors, the module registry and compiler/project configuration."""

from .config import CompilerConfig, ProjectConfig, load_project_config
from .info import IosLanguage, ModuleInfo
from .registry import ModuleRegistry, UnknownModuleError, load_module_registry

__all__ = [
	"CompilerConfig",
	"IosLanguage",
	"ModuleInfo",
	"ModuleRegistry",
	"ProjectConfig",
	"UnknownModuleError",
	"load_module_registry",
	"load_project_config",
]
