# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Importables and import collection for the generated services module.

An importable is either unresolved (a type expression whose origin is not yet
known) or resolved (an exported name plus the output path it is imported
from). `Import` merges resolved importables into one import declaration per
path.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Union

from tsoaclient.core.errors import ImportConflictError
from tsoaclient.parser.ast import TypeExpr


@dataclass(frozen=True)
class UnresolvedImportable:
	"""A type expression still to be traced to its declarations."""

	type_expr: TypeExpr


@dataclass(frozen=True)
class ResolvedImportable:
	"""`import { name as alias } from "path"`; `alias` is the local binding when set."""

	name: str
	path: str
	alias: Optional[str] = None

	@property
	def local_name(self) -> str:
		return self.alias or self.name


Importable = Union[UnresolvedImportable, ResolvedImportable]


@dataclass
class ImportDeclaration:
	path: str
	specifiers: List[ResolvedImportable]


class Import:
	"""
	Groups resolved importables by path.

	Paths keep first-encounter order and so do the names inside each path.
	Importing one name both aliased and bare (or under two different aliases)
	from the same path cannot be expressed in one output module and raises
	`ImportConflictError`.
	"""

	def __init__(self, resolved: Iterable[ResolvedImportable]) -> None:
		self._by_path: Dict[str, List[ResolvedImportable]] = {}
		for importable in resolved:
			self.add(importable)

	def add(self, importable: ResolvedImportable) -> None:
		group = self._by_path.setdefault(importable.path, [])
		for existing in group:
			if existing.name != importable.name:
				continue
			if existing.alias != importable.alias:
				raise ImportConflictError(
					f"cannot import '{importable.name}' from '{importable.path}' "
					f"both as '{existing.local_name}' and as '{importable.local_name}'"
				)
			return
		group.append(importable)

	@property
	def paths(self) -> List[str]:
		return list(self._by_path)

	def get_declarations(self) -> List[ImportDeclaration]:
		return [ImportDeclaration(path=path, specifiers=list(items)) for path, items in self._by_path.items()]


__all__ = [
	"UnresolvedImportable",
	"ResolvedImportable",
	"Importable",
	"ImportDeclaration",
	"Import",
]
