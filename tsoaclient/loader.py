# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Module loader: path -> parsed `Module`, memoized per loader instance.

Specifiers follow the TypeScript resolution rules the generator needs:
`./user` tries `./user.ts` then `./user/index.ts`. Only relative specifiers
can be followed; package imports (`tsoa`, `express`) have no source here.
"""

from __future__ import annotations

import glob
from pathlib import Path
from typing import Dict, Iterable, List

from lark.exceptions import UnexpectedInput

from tsoaclient.core.errors import ModuleLoadError
from tsoaclient.core.span import Span
from tsoaclient.parser import parse_module
from tsoaclient.parser.ast import Module

SOURCE_SUFFIX = ".ts"


class ModuleLoader:
	"""
	Parses source modules on demand and caches them by resolved path.

	One loader belongs to one pipeline run; independent runs (and tests) build
	their own loader so no parse state is shared between them.
	"""

	def __init__(self) -> None:
		self._modules: Dict[Path, Module] = {}

	@property
	def loaded_paths(self) -> List[Path]:
		return list(self._modules)

	def resolve_path(self, path: Path | str) -> Path:
		"""Resolve `path` to an existing source file, adding `.ts` or `/index.ts` when missing."""
		candidate = Path(path)
		if candidate.suffix != SOURCE_SUFFIX:
			with_suffix = candidate.with_name(candidate.name + SOURCE_SUFFIX)
			index_file = candidate / f"index{SOURCE_SUFFIX}"
			if with_suffix.is_file():
				candidate = with_suffix
			elif index_file.is_file():
				candidate = index_file
		if not candidate.is_file():
			raise ModuleLoadError(f"module not found: {candidate}", file=candidate)
		return candidate.resolve()

	def load(self, path: Path | str) -> Module:
		resolved = self.resolve_path(path)
		cached = self._modules.get(resolved)
		if cached is not None:
			return cached
		try:
			source = resolved.read_text(encoding="utf-8")
		except (OSError, UnicodeDecodeError) as err:
			raise ModuleLoadError(f"cannot read module: {err}", file=resolved) from err
		try:
			module = parse_module(source, path=resolved)
		except UnexpectedInput as err:
			span = Span(file=str(resolved), line=getattr(err, "line", None), column=getattr(err, "column", None))
			first_line = str(err).strip().splitlines()[0] if str(err).strip() else "syntax error"
			raise ModuleLoadError(f"syntax error: {first_line}", loc=span) from err
		self._modules[resolved] = module
		return module

	def load_relative(self, module: Module, specifier: str) -> Module:
		"""Load the module `specifier` names, relative to the importing `module`."""
		if not specifier.startswith("."):
			raise ModuleLoadError(
				f"cannot follow non-relative module specifier '{specifier}' from {module.path}",
				file=module.path,
			)
		return self.load(module.path.parent / specifier)

	def expand_globs(self, patterns: Iterable[str]) -> List[Path]:
		"""Expand glob patterns (with `**` support) to source paths, deduplicated, pattern order kept."""
		seen: set[Path] = set()
		paths: List[Path] = []
		for pattern in patterns:
			for match in sorted(glob.glob(pattern, recursive=True)):
				path = Path(match)
				if path.suffix != SOURCE_SUFFIX or not path.is_file():
					continue
				resolved = path.resolve()
				if resolved in seen:
					continue
				seen.add(resolved)
				paths.append(resolved)
		return paths


__all__ = ["ModuleLoader", "SOURCE_SUFFIX"]
