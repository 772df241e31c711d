# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
AST for the TypeScript subset read from controller and model modules.

Only what the generator needs is modelled in detail: module directives
(imports/exports), type declarations with their type expressions, and class
declarations with decorators, methods and parameters. Function bodies and
initializers are kept opaque.

Type expressions and type declarations carry their exact source `text` so the
printer can re-emit them verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class Located:
	line: int
	column: int


# --- type expressions --------------------------------------------------------


class TypeExpr:
	loc: Located
	text: str


@dataclass
class TypeRef(TypeExpr):
	"""Named type reference, `Name` / `ns.Name` with optional type arguments."""

	name: str
	args: List[TypeExpr]
	loc: Located
	text: str
	qualifier: Optional[str] = None  # `ns` in `ns.Name`


@dataclass
class KeywordType(TypeExpr):
	"""Primitive keyword type (`string`, `number`, `void`, ...)."""

	name: str
	loc: Located
	text: str


@dataclass
class LiteralType(TypeExpr):
	"""String, numeric or boolean literal type."""

	value: object
	loc: Located
	text: str


@dataclass
class ArrayType(TypeExpr):
	element: TypeExpr
	loc: Located
	text: str


@dataclass
class TupleType(TypeExpr):
	elements: List[TypeExpr]
	loc: Located
	text: str


@dataclass
class UnionType(TypeExpr):
	members: List[TypeExpr]
	loc: Located
	text: str


@dataclass
class IntersectionType(TypeExpr):
	members: List[TypeExpr]
	loc: Located
	text: str


@dataclass
class ParenType(TypeExpr):
	inner: TypeExpr
	loc: Located
	text: str


@dataclass
class TypeOperator(TypeExpr):
	"""`keyof T`, `readonly T[]`, `unique symbol`."""

	op: str
	inner: TypeExpr
	loc: Located
	text: str


@dataclass
class TypeQuery(TypeExpr):
	"""`typeof value`."""

	name: str
	loc: Located
	text: str


@dataclass
class IndexedAccessType(TypeExpr):
	"""`T["key"]`."""

	object_type: TypeExpr
	index_type: TypeExpr
	loc: Located
	text: str


@dataclass
class FunctionType(TypeExpr):
	"""`(a: A) => R`."""

	params: List["SigParam"]
	return_type: TypeExpr
	loc: Located
	text: str


@dataclass
class ConditionalType(TypeExpr):
	"""`C extends E ? T : F`."""

	check_type: TypeExpr
	extends_type: TypeExpr
	true_type: TypeExpr
	false_type: TypeExpr
	loc: Located
	text: str


@dataclass
class InferType(TypeExpr):
	"""`infer U` inside the extends clause of a conditional type."""

	name: str
	loc: Located
	text: str


@dataclass
class MappedType(TypeExpr):
	"""`{ readonly [K in C as N]?: V }`."""

	key_name: str
	constraint: TypeExpr
	name_type: Optional[TypeExpr]
	value_type: TypeExpr
	loc: Located
	text: str
	readonly: bool = False
	optional: bool = False


@dataclass
class TemplateLiteralType(TypeExpr):
	"""Backquoted template literal type, kept as text."""

	loc: Located
	text: str


@dataclass
class TypeLiteral(TypeExpr):
	"""Inline structural type `{ a: A; b?: B }`."""

	members: List["TypeMember"]
	loc: Located
	text: str


# --- members of interfaces and type literals -----------------------------------


class TypeMember:
	loc: Located


@dataclass
class SigParam:
	name: str
	type_expr: Optional[TypeExpr]
	optional: bool = False
	rest: bool = False


@dataclass
class PropertySig(TypeMember):
	name: str
	type_expr: TypeExpr
	loc: Located
	optional: bool = False
	readonly: bool = False


@dataclass
class IndexSig(TypeMember):
	key_name: str
	key_type: TypeExpr
	type_expr: TypeExpr
	loc: Located
	readonly: bool = False


@dataclass
class MethodSig(TypeMember):
	name: str
	type_params: List["TypeParam"]
	params: List[SigParam]
	return_type: Optional[TypeExpr]
	loc: Located
	optional: bool = False


@dataclass
class TypeParam:
	name: str
	constraint: Optional[TypeExpr] = None
	default: Optional[TypeExpr] = None


# --- statements ----------------------------------------------------------------


class Stmt:
	loc: Located


@dataclass
class ImportSpec:
	"""`name` or `name as alias` inside `import { ... }`."""

	name: str
	alias: Optional[str] = None
	type_only: bool = False

	@property
	def local_name(self) -> str:
		return self.alias or self.name


@dataclass
class ImportDecl(Stmt):
	"""
	Module import:

	  import { A, B as C } from "./x";
	  import D, { E } from "./y";
	  import * as ns from "./z";
	  import "./side-effect";
	"""

	loc: Located
	module_specifier: str
	specifiers: List[ImportSpec] = field(default_factory=list)
	default_name: Optional[str] = None
	namespace: Optional[str] = None
	type_only: bool = False

	def find(self, local_name: str) -> Optional[ImportSpec]:
		return next((s for s in self.specifiers if s.local_name == local_name), None)


@dataclass
class ExportSpec:
	"""`name` or `name as exported` inside `export { ... }`."""

	name: str
	alias: Optional[str] = None
	type_only: bool = False

	@property
	def exported_name(self) -> str:
		return self.alias or self.name


@dataclass
class ExportDecl(Stmt):
	"""
	Export directive:

	  export { A, B as C } from "./x";   (named re-export)
	  export { A };                      (local export list)
	  export * from "./x";               (bare re-export, specifiers is None)
	  export * as ns from "./x";
	"""

	loc: Located
	specifiers: Optional[List[ExportSpec]]
	module_specifier: Optional[str] = None
	namespace: Optional[str] = None
	type_only: bool = False

	@property
	def is_bare(self) -> bool:
		return self.specifiers is None and self.namespace is None

	def find(self, exported_name: str) -> Optional[ExportSpec]:
		return next((s for s in self.specifiers or [] if s.exported_name == exported_name), None)


@dataclass
class InterfaceDecl(Stmt):
	name: str
	type_params: List[TypeParam]
	heritage: List[TypeRef]
	members: List[TypeMember]
	loc: Located
	text: str
	exported: bool = False


@dataclass
class TypeAliasDecl(Stmt):
	name: str
	type_params: List[TypeParam]
	type_expr: TypeExpr
	loc: Located
	text: str
	exported: bool = False


@dataclass
class EnumMember:
	name: str
	value: Optional[str] = None


@dataclass
class EnumDecl(Stmt):
	name: str
	members: List[EnumMember]
	loc: Located
	text: str
	exported: bool = False
	is_const: bool = False


@dataclass
class DecoratorArg:
	"""One decorator call argument; `value` is set for string literals only."""

	text: str
	value: Optional[str] = None

	@property
	def is_string(self) -> bool:
		return self.value is not None


@dataclass
class Decorator:
	name: str
	args: List[DecoratorArg]
	loc: Located
	is_call: bool = True


@dataclass
class Param:
	name: str
	type_expr: Optional[TypeExpr]
	decorators: List[Decorator]
	loc: Located
	optional: bool = False
	rest: bool = False
	modifiers: List[str] = field(default_factory=list)


@dataclass
class MethodDecl:
	name: str
	decorators: List[Decorator]
	modifiers: List[str]
	type_params: List[TypeParam]
	params: List[Param]
	return_type: Optional[TypeExpr]
	loc: Located
	has_body: bool = True

	@property
	def is_async(self) -> bool:
		return "async" in self.modifiers

	@property
	def is_constructor(self) -> bool:
		return self.name == "constructor"


@dataclass
class PropertyDecl:
	name: str
	decorators: List[Decorator]
	modifiers: List[str]
	type_expr: Optional[TypeExpr]
	loc: Located


@dataclass
class ClassDecl(Stmt):
	name: Optional[str]
	decorators: List[Decorator]
	type_params: List[TypeParam]
	extends: Optional[TypeRef]
	implements: List[TypeRef]
	methods: List[MethodDecl]
	properties: List[PropertyDecl]
	loc: Located
	exported: bool = False
	is_default: bool = False
	is_abstract: bool = False


@dataclass
class OtherStmt(Stmt):
	"""Function/variable/default-export statements kept only by kind and name."""

	kind: str
	name: Optional[str]
	loc: Located
	exported: bool = False


TypeDecl = InterfaceDecl | TypeAliasDecl | EnumDecl


@dataclass
class Module:
	"""A parsed source file: its path identity, text and top-level statements."""

	path: Path
	source: str
	statements: List[Stmt] = field(default_factory=list)

	@property
	def classes(self) -> List[ClassDecl]:
		return [s for s in self.statements if isinstance(s, ClassDecl)]

	@property
	def imports(self) -> List[ImportDecl]:
		return [s for s in self.statements if isinstance(s, ImportDecl)]

	@property
	def exports(self) -> List[ExportDecl]:
		return [s for s in self.statements if isinstance(s, ExportDecl)]


__all__ = [
	"Located",
	"TypeExpr",
	"TypeRef",
	"KeywordType",
	"LiteralType",
	"ArrayType",
	"TupleType",
	"UnionType",
	"IntersectionType",
	"ParenType",
	"TypeOperator",
	"TypeQuery",
	"IndexedAccessType",
	"FunctionType",
	"ConditionalType",
	"InferType",
	"MappedType",
	"TemplateLiteralType",
	"TypeLiteral",
	"TypeMember",
	"SigParam",
	"PropertySig",
	"IndexSig",
	"MethodSig",
	"TypeParam",
	"Stmt",
	"ImportSpec",
	"ImportDecl",
	"ExportSpec",
	"ExportDecl",
	"InterfaceDecl",
	"TypeAliasDecl",
	"EnumMember",
	"EnumDecl",
	"DecoratorArg",
	"Decorator",
	"Param",
	"MethodDecl",
	"PropertyDecl",
	"ClassDecl",
	"OtherStmt",
	"TypeDecl",
	"Module",
]
