# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Valdi compiler pipeline stages (`valdic`).

The native source combination stage lives in `valdic.processors`; the CLI
entrypoint is `valdic.compiler:main`.
"""

__all__ = []
