# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Cross-module declaration resolver.

Given a type expression referenced from some module, find the interface, type
alias or enum declaring every named type it mentions, following imports and
re-exports across modules, and record each declaration once in a registry.
The registry doubles as the visited set (cyclic references terminate on the
memo check) and, in first-discovery order, as the content of the generated
types module.

Visibility rules:
  - a name reached through an import or re-export is looked up with
    `export_only` set: only `export`ed declarations (or export lists) match;
  - `export { A } from "./x"` forwards the lookup to `./x`;
  - `export * from "./x"` may or may not provide the name, so bare re-exports
    are tried last, in source order, after every direct match failed;
  - only the very last alternative of the original request may fail hard
    (`is_last`); earlier alternatives report "not found" to their caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Dict, FrozenSet, List, Optional

from tsoaclient.core.diagnostics import Diagnostic
from tsoaclient.core.errors import DeclarationNotFoundError, UnsupportedTypeError
from tsoaclient.core.span import Span
from tsoaclient.generator.importable import ResolvedImportable, UnresolvedImportable
from tsoaclient.loader import ModuleLoader
from tsoaclient.parser.ast import (
	ArrayType,
	ConditionalType,
	EnumDecl,
	ExportDecl,
	FunctionType,
	ImportDecl,
	IndexedAccessType,
	IndexSig,
	InferType,
	InterfaceDecl,
	IntersectionType,
	KeywordType,
	LiteralType,
	MappedType,
	MethodSig,
	Module,
	ParenType,
	PropertySig,
	TemplateLiteralType,
	TupleType,
	TypeAliasDecl,
	TypeDecl,
	TypeExpr,
	TypeLiteral,
	TypeMember,
	TypeOperator,
	TypeParam,
	TypeQuery,
	TypeRef,
	UnionType,
)

# Names assumed to exist in every output environment. References to these are
# never registered, but their type arguments are still walked.
BUILTIN_TYPE_NAMES: FrozenSet[str] = frozenset(
	{
		"Array",
		"ReadonlyArray",
		"Record",
		"Partial",
		"Required",
		"Readonly",
		"Pick",
		"Omit",
		"Exclude",
		"Extract",
		"NonNullable",
		"Promise",
		"PromiseLike",
		"Awaited",
		"Date",
		"Map",
		"Set",
		"ReadonlyMap",
		"ReadonlySet",
		"Blob",
		"File",
	}
)


@dataclass
class _Registration:
	declaration: TypeDecl
	module: Module


class TypeResolver:
	"""
	Resolves referenced type names to declarations and collects them.

	One resolver owns one registry; it is created per pipeline run together
	with the loader it reads modules from. `output_path` is the import path of
	the generated types module, used for every `ResolvedImportable` returned.
	"""

	def __init__(
		self,
		loader: ModuleLoader,
		output_path: str = "./types.gen",
		*,
		diagnostics: Optional[List[Diagnostic]] = None,
	) -> None:
		self.loader = loader
		self.output_path = output_path
		self.diagnostics = diagnostics
		self._registry: Dict[str, _Registration] = {}

	def __contains__(self, name: str) -> bool:
		return name in self._registry

	def __len__(self) -> int:
		return len(self._registry)

	def resolve(self, module: Module, unresolved: UnresolvedImportable) -> List[ResolvedImportable]:
		return self.resolve_type(module, unresolved.type_expr)

	def resolve_type(
		self,
		module: Module,
		type_expr: TypeExpr,
		bound_type_params: Collection[str] = (),
	) -> List[ResolvedImportable]:
		"""
		Return the named types `type_expr` depends on, registering their declarations.

		The result is ordered by first appearance and free of duplicates.
		Names in `bound_type_params` (generic parameters in scope) and in
		`BUILTIN_TYPE_NAMES` contribute nothing.
		"""
		results: List[ResolvedImportable] = []
		self._walk(module, type_expr, frozenset(bound_type_params), results)
		return results

	def register_declaration(
		self,
		module: Module,
		name: str,
		export_only: bool = False,
		is_last: bool = True,
	) -> bool:
		"""
		Find and register the declaration of `name` as seen from `module`.

		Returns True when the name is (or already was) registered. When the
		search is exhausted, raises `DeclarationNotFoundError` if `is_last`,
		otherwise returns False so the caller can try its next alternative.
		"""
		if name in self._registry:
			return True

		bare_reexports: List[ExportDecl] = []
		for stmt in module.statements:
			if isinstance(stmt, ImportDecl):
				spec = stmt.find(name)
				if spec is not None:
					if spec.alias is not None:
						raise UnsupportedTypeError(
							f"renamed import '{spec.name} as {spec.alias}' cannot be emitted into the types module",
							loc=stmt.loc,
							file=module.path,
						)
					target = self.loader.load_relative(module, stmt.module_specifier)
					return self.register_declaration(target, name, export_only=True, is_last=is_last)
				if stmt.default_name == name:
					raise UnsupportedTypeError(
						f"default import '{name}' cannot be emitted into the types module",
						loc=stmt.loc,
						file=module.path,
					)
			elif isinstance(stmt, ExportDecl):
				# A re-export does not bind the name locally.
				if not export_only:
					continue
				if stmt.specifiers is None:
					if stmt.is_bare:
						bare_reexports.append(stmt)
					continue
				spec = stmt.find(name)
				if spec is None:
					continue
				if spec.alias is not None:
					raise UnsupportedTypeError(
						f"renamed export '{spec.name} as {spec.alias}' cannot be emitted into the types module",
						loc=stmt.loc,
						file=module.path,
					)
				if stmt.module_specifier is None:
					return self.register_declaration(module, name, export_only=False, is_last=is_last)
				target = self.loader.load_relative(module, stmt.module_specifier)
				return self.register_declaration(target, name, export_only=True, is_last=is_last)
			elif isinstance(stmt, (InterfaceDecl, TypeAliasDecl, EnumDecl)):
				if stmt.name != name:
					continue
				if export_only and not stmt.exported:
					continue
				self._register(module, stmt)
				return True

		last_index = len(bare_reexports) - 1
		for index, export in enumerate(bare_reexports):
			target = self.loader.load_relative(module, export.module_specifier)
			if self.register_declaration(target, name, export_only=True, is_last=is_last and index == last_index):
				return True

		if is_last:
			raise DeclarationNotFoundError(name, file=module.path)
		return False

	def export_snapshot(self) -> List[TypeDecl]:
		"""All registered declarations in first-discovery order."""
		return [entry.declaration for entry in self._registry.values()]

	def origin_of(self, name: str) -> Path:
		return self._registry[name].module.path

	# --- internals -----------------------------------------------------------------

	def _register(self, module: Module, decl: TypeDecl) -> None:
		# Insert before walking dependencies so cycles hit the memo check.
		self._registry[decl.name] = _Registration(declaration=decl, module=module)
		if self.diagnostics is not None:
			self.diagnostics.append(
				Diagnostic(
					message=f"resolved type '{decl.name}'",
					phase="resolve",
					severity="note",
					span=Span.from_loc(decl.loc, file=module.path),
				)
			)
		if isinstance(decl, EnumDecl):
			return
		bound = frozenset(p.name for p in decl.type_params)
		results: List[ResolvedImportable] = []
		self._walk_type_params(module, decl.type_params, bound, results)
		if isinstance(decl, TypeAliasDecl):
			self._walk(module, decl.type_expr, bound, results)
			return
		for heritage in decl.heritage:
			self._walk(module, heritage, bound, results)
		self._walk_members(module, decl.members, bound, results)

	def _walk(
		self,
		module: Module,
		type_expr: TypeExpr,
		bound: FrozenSet[str],
		results: List[ResolvedImportable],
	) -> None:
		if isinstance(type_expr, (KeywordType, LiteralType)):
			return
		if isinstance(type_expr, TypeRef):
			if type_expr.qualifier is not None:
				raise UnsupportedTypeError(
					f"qualified type reference '{type_expr.text}' is not supported",
					loc=type_expr.loc,
					file=module.path,
				)
			name = type_expr.name
			if name not in bound and name not in BUILTIN_TYPE_NAMES:
				self.register_declaration(module, name)
				resolved = ResolvedImportable(name=name, path=self.output_path)
				if resolved not in results:
					results.append(resolved)
			for arg in type_expr.args:
				self._walk(module, arg, bound, results)
		elif isinstance(type_expr, ArrayType):
			self._walk(module, type_expr.element, bound, results)
		elif isinstance(type_expr, (ParenType, TypeOperator)):
			self._walk(module, type_expr.inner, bound, results)
		elif isinstance(type_expr, (UnionType, IntersectionType)):
			for member in type_expr.members:
				self._walk(module, member, bound, results)
		elif isinstance(type_expr, TupleType):
			for element in type_expr.elements:
				self._walk(module, element, bound, results)
		elif isinstance(type_expr, TypeLiteral):
			self._walk_members(module, type_expr.members, bound, results)
		elif isinstance(type_expr, _UNSUPPORTED_SHAPES):
			raise UnsupportedTypeError(
				f"unsupported type shape '{type_expr.text}' ({_shape_name(type_expr)})",
				loc=type_expr.loc,
				file=module.path,
			)
		else:
			raise UnsupportedTypeError(
				f"unhandled type expression {type(type_expr).__name__}",
				loc=getattr(type_expr, "loc", None),
				file=module.path,
			)

	def _walk_members(
		self,
		module: Module,
		members: List[TypeMember],
		bound: FrozenSet[str],
		results: List[ResolvedImportable],
	) -> None:
		for member in members:
			if isinstance(member, PropertySig):
				self._walk(module, member.type_expr, bound, results)
			elif isinstance(member, IndexSig):
				self._walk(module, member.key_type, bound, results)
				self._walk(module, member.type_expr, bound, results)
			elif isinstance(member, MethodSig):
				method_bound = bound | {p.name for p in member.type_params}
				self._walk_type_params(module, member.type_params, method_bound, results)
				for param in member.params:
					if param.type_expr is not None:
						self._walk(module, param.type_expr, method_bound, results)
				if member.return_type is not None:
					self._walk(module, member.return_type, method_bound, results)

	def _walk_type_params(
		self,
		module: Module,
		type_params: List[TypeParam],
		bound: FrozenSet[str],
		results: List[ResolvedImportable],
	) -> None:
		for param in type_params:
			if param.constraint is not None:
				self._walk(module, param.constraint, bound, results)
			if param.default is not None:
				self._walk(module, param.default, bound, results)


_SHAPE_NAMES = {
	TypeQuery: "typeof query",
	IndexedAccessType: "indexed access type",
	FunctionType: "function type",
	ConditionalType: "conditional type",
	InferType: "infer type",
	MappedType: "mapped type",
	TemplateLiteralType: "template literal type",
}
_UNSUPPORTED_SHAPES = tuple(_SHAPE_NAMES)


def _shape_name(type_expr: TypeExpr) -> str:
	return _SHAPE_NAMES[type(type_expr)]


__all__ = ["TypeResolver", "BUILTIN_TYPE_NAMES"]
