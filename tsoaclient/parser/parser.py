# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import codecs
import re
from pathlib import Path
from typing import Iterator, List, Optional

from lark import Lark, Token, Tree

from .ast import (
	ArrayType,
	ClassDecl,
	ConditionalType,
	Decorator,
	DecoratorArg,
	EnumDecl,
	EnumMember,
	ExportDecl,
	ExportSpec,
	FunctionType,
	ImportDecl,
	ImportSpec,
	IndexedAccessType,
	InferType,
	IndexSig,
	InterfaceDecl,
	IntersectionType,
	KeywordType,
	LiteralType,
	Located,
	MappedType,
	MethodDecl,
	MethodSig,
	Module,
	OtherStmt,
	Param,
	ParenType,
	PropertyDecl,
	PropertySig,
	SigParam,
	Stmt,
	TemplateLiteralType,
	TupleType,
	TypeAliasDecl,
	TypeExpr,
	TypeLiteral,
	TypeMember,
	TypeOperator,
	TypeParam,
	TypeQuery,
	TypeRef,
	UnionType,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

# Names that denote primitive keyword types when used without qualifier or
# type arguments.
KEYWORD_TYPES = frozenset(
	{
		"any",
		"bigint",
		"boolean",
		"never",
		"null",
		"number",
		"object",
		"string",
		"symbol",
		"undefined",
		"unknown",
		"void",
	}
)

_TYPE_NODES = frozenset(
	{
		"union_type",
		"intersection_type",
		"type_operator",
		"array_type",
		"indexed_access_type",
		"paren_type",
		"fn_type",
		"type_literal",
		"tuple_type",
		"type_query",
		"literal_type",
		"type_ref",
		"conditional_type",
		"mapped_type",
		"infer_type",
		"template_literal_type",
	}
)

_MEMBER_NODES = frozenset({"property_sig", "index_sig", "method_sig"})

# Keyword terminals, by source spelling, that open a top-level statement or a
# class member. Tokens lexed inside an initializer are plain names.
_STATEMENT_KEYWORDS = frozenset(
	{"abstract", "async", "class", "const", "declare", "enum", "export", "function", "import", "interface", "let", "type", "var"}
)
_MEMBER_KEYWORDS = frozenset(
	{"abstract", "async", "declare", "override", "private", "protected", "public", "readonly", "static"}
)
# Words that continue an expression or type on the next line.
_CONTINUATION_WORDS = frozenset({"as", "extends", "in", "instanceof", "satisfies"})
_TERMINABLE = frozenset({"NAME", "NUMBER", "STRING", "TEMPLATE", "RPAR", "RSQB", "RBRACE", "MORETHAN"})
_IDENT_RE = re.compile(r"[A-Za-z_$][\w$]*")


class TerminatorInserter:
	"""
	Ends statement-level initializers that have no `;`.

	`export const VERSION = 1` and `private prefix = "x"` may stop at a line
	break. An initializer is an opaque token run, so it would otherwise absorb
	the next declaration. Once an `=` or a `const`, `let`, `var` or `default`
	keyword is seen at statement level (the top level, or directly inside a class
	body), a zero-width SEMICOLON is inserted after the last token that can end
	an expression when what follows is a name, keyword or decorator on a new
	line, the `}` closing the class body, or the end of input.

	The token after the inserted terminator was lexed in initializer context,
	so keywords and `@` are re-typed for the statement that follows.
	"""

	always_accept = ("RBRACE",)

	def process(self, stream: Iterator[Token]) -> Iterator[Token]:
		levels = [0]  # brace depths whose contents are statements or class members
		depth = 0
		nesting = 0  # open parentheses and brackets
		class_pending = False
		open_at: Optional[int] = None  # depth of the initializer still open
		prev: Optional[Token] = None
		for tok in stream:
			if open_at == depth and nesting == 0 and prev is not None and prev.type in _TERMINABLE:
				if tok.type == "RBRACE" or (tok.line > prev.end_line and _starts_statement(tok)):
					yield _terminator(prev)
					open_at = None
					tok = _retype(tok, top_level=depth == 0)
			if tok.type in ("LPAR", "LSQB"):
				nesting += 1
			elif tok.type in ("RPAR", "RSQB"):
				nesting = max(nesting - 1, 0)
			elif tok.type == "LBRACE":
				depth += 1
				if class_pending and nesting == 0:
					levels.append(depth)
					class_pending = False
			elif tok.type == "RBRACE":
				if depth > 0 and levels[-1] == depth:
					levels.pop()
				depth = max(depth - 1, 0)
				if open_at is not None and open_at > depth:
					open_at = None
			elif tok.type == "CLASS":
				class_pending = True
			elif depth == levels[-1] and nesting == 0:
				if tok.type in ("EQUAL", "DEFAULT", "CONST", "LET", "VAR"):
					open_at = depth
				elif tok.type == "SEMICOLON":
					open_at = None
			yield tok
			prev = tok
		if open_at == depth and nesting == 0 and prev is not None and prev.type in _TERMINABLE:
			yield _terminator(prev)


def _starts_statement(tok: Token) -> bool:
	if tok.value == "@" or tok.type in ("STRING", "NUMBER"):
		return True
	return _IDENT_RE.fullmatch(tok.value) is not None and tok.value not in _CONTINUATION_WORDS


def _retype(tok: Token, *, top_level: bool) -> Token:
	if tok.value == "@":
		return Token.new_borrow_pos("AT", tok.value, tok)
	keywords = _STATEMENT_KEYWORDS if top_level else _MEMBER_KEYWORDS
	if tok.value in keywords:
		return Token.new_borrow_pos(tok.value.upper(), tok.value, tok)
	return tok


def _terminator(prev: Token) -> Token:
	return Token(
		"SEMICOLON",
		";",
		start_pos=prev.end_pos,
		line=prev.end_line,
		column=prev.end_column,
		end_line=prev.end_line,
		end_column=prev.end_column,
		end_pos=prev.end_pos,
	)


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="start",
	propagate_positions=True,
	maybe_placeholders=False,
	postlex=TerminatorInserter(),
)

_TYPE_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	start="type_expr",
	propagate_positions=True,
	maybe_placeholders=False,
)


def _decode_string_token(tok: Token) -> str:
	"""
	Decode a single- or double-quoted STRING token.

	Python-style escapes are interpreted (unicode_escape), then the resulting
	code points are reinterpreted as raw bytes (latin-1) and decoded as UTF-8
	so non-ASCII source text survives the round trip.
	"""
	content = tok.value[1:-1]  # strip quotes
	unescaped = codecs.decode(content, "unicode_escape")
	raw_bytes = unescaped.encode("latin-1")
	return raw_bytes.decode("utf-8")


def parse_module(source: str, path: Path | str | None = None) -> Module:
	"""Parse TypeScript source into a `Module`. Raises lark `UnexpectedInput` on syntax errors."""
	tree = _PARSER.parse(source)
	module_path = Path(path) if path is not None else Path("<memory>")
	return Module(path=module_path, source=source, statements=_ModuleBuilder(source).build_statements(tree))


def parse_type_expr(source: str) -> TypeExpr:
	"""Parse a standalone type expression (used by tests and config helpers)."""
	tree = _TYPE_PARSER.parse(source)
	return _ModuleBuilder(source).build_type(tree)


class _ModuleBuilder:
	"""
	Converts the lark parse tree into AST nodes.

	Holds the source text so declarations and type expressions can record the
	exact slice they were parsed from.
	"""

	def __init__(self, source: str) -> None:
		self.source = source

	def _text(self, node: Tree | Token) -> str:
		if isinstance(node, Token):
			return node.value
		return self.source[node.meta.start_pos : node.meta.end_pos]

	# --- statements -------------------------------------------------------------

	def build_statements(self, tree: Tree) -> List[Stmt]:
		statements: List[Stmt] = []
		for child in tree.children:
			if not isinstance(child, Tree):
				continue
			kind = _name(child)
			if kind == "import_decl":
				statements.append(self._build_import(child))
			elif kind == "side_effect_import":
				statements.append(ImportDecl(loc=_loc(child), module_specifier=_decode_string_token(_token(child, "STRING"))))
			elif kind == "export_named":
				statements.append(self._build_export_named(child))
			elif kind == "export_star":
				statements.append(self._build_export_star(child))
			elif kind == "interface_stmt":
				statements.append(self._build_interface(child))
			elif kind == "type_alias_stmt":
				statements.append(self._build_type_alias(child))
			elif kind == "enum_stmt":
				statements.append(self._build_enum(child))
			elif kind == "class_stmt":
				statements.append(self._build_class(child))
			elif kind in {"function_stmt", "var_stmt"}:
				name_tok = _token(child, "NAME")
				statements.append(
					OtherStmt(
						kind="function" if kind == "function_stmt" else "variable",
						name=name_tok.value,
						loc=_loc(child),
						exported=_has_token(child, "EXPORT"),
					)
				)
			elif kind == "export_default_stmt":
				statements.append(OtherStmt(kind="default_export", name=None, loc=_loc(child), exported=True))
			else:
				raise ValueError(f"unexpected top-level node '{kind}'")
		return statements

	def _build_import(self, tree: Tree) -> ImportDecl:
		clause = _subtree(tree, "import_clause")
		specifiers: List[ImportSpec] = []
		default_name: Optional[str] = None
		namespace: Optional[str] = None
		for part in clause.children:
			kind = _name(part)
			if kind == "default_binding":
				default_name = _token(part, "NAME").value
			elif kind == "namespace_binding":
				namespace = _token(part, "NAME").value
			elif kind == "named_imports":
				for spec in _subtrees(part, "import_spec"):
					names = _tokens(spec, "NAME")
					specifiers.append(
						ImportSpec(
							name=names[0].value,
							alias=names[1].value if len(names) > 1 else None,
							type_only=_has_token(spec, "TYPE"),
						)
					)
		return ImportDecl(
			loc=_loc(tree),
			module_specifier=_decode_string_token(_token(tree, "STRING")),
			specifiers=specifiers,
			default_name=default_name,
			namespace=namespace,
			type_only=_has_token(tree, "TYPE"),
		)

	def _build_export_named(self, tree: Tree) -> ExportDecl:
		specifiers: List[ExportSpec] = []
		for spec in _subtrees(_subtree(tree, "named_exports"), "export_spec"):
			names = _tokens(spec, "NAME")
			specifiers.append(
				ExportSpec(
					name=names[0].value,
					alias=names[1].value if len(names) > 1 else None,
					type_only=_has_token(spec, "TYPE"),
				)
			)
		source_tok = _maybe_token(tree, "STRING")
		return ExportDecl(
			loc=_loc(tree),
			specifiers=specifiers,
			module_specifier=_decode_string_token(source_tok) if source_tok is not None else None,
			type_only=_has_token(tree, "TYPE"),
		)

	def _build_export_star(self, tree: Tree) -> ExportDecl:
		ns_tok = _maybe_token(tree, "NAME")
		return ExportDecl(
			loc=_loc(tree),
			specifiers=None,
			module_specifier=_decode_string_token(_token(tree, "STRING")),
			namespace=ns_tok.value if ns_tok is not None else None,
			type_only=_has_token(tree, "TYPE"),
		)

	def _build_interface(self, tree: Tree) -> InterfaceDecl:
		decl = _subtree(tree, "interface_decl")
		heritage_node = _maybe_subtree(decl, "interface_heritage")
		heritage = [self._build_type_ref(t) for t in _subtrees(heritage_node, "type_ref")] if heritage_node else []
		body = _subtree(decl, "interface_body")
		return InterfaceDecl(
			name=_token(decl, "NAME").value,
			type_params=self._build_type_params(_maybe_subtree(decl, "type_params")),
			heritage=heritage,
			members=self._build_members(body),
			loc=_loc(decl),
			text=self._text(decl),
			exported=_has_token(tree, "EXPORT"),
		)

	def _build_type_alias(self, tree: Tree) -> TypeAliasDecl:
		decl = _subtree(tree, "type_alias_decl")
		type_node = next(c for c in decl.children if isinstance(c, Tree) and _name(c) in _TYPE_NODES)
		return TypeAliasDecl(
			name=_token(decl, "NAME").value,
			type_params=self._build_type_params(_maybe_subtree(decl, "type_params")),
			type_expr=self.build_type(type_node),
			loc=_loc(decl),
			text=self._text(decl),
			exported=_has_token(tree, "EXPORT"),
		)

	def _build_enum(self, tree: Tree) -> EnumDecl:
		decl = _subtree(tree, "enum_decl")
		members: List[EnumMember] = []
		for member in _subtrees(decl, "enum_member"):
			key = _subtree(member, "property_key")
			value_node = _maybe_subtree(member, "enum_value")
			members.append(
				EnumMember(
					name=_property_key(key),
					value=self._text(value_node) if value_node is not None else None,
				)
			)
		return EnumDecl(
			name=_token(decl, "NAME").value,
			members=members,
			loc=_loc(decl),
			text=self._text(decl),
			exported=_has_token(tree, "EXPORT"),
			is_const=_has_token(decl, "CONST"),
		)

	def _build_class(self, tree: Tree) -> ClassDecl:
		decl = _subtree(tree, "class_decl")
		name_tok = _maybe_token(decl, "NAME")
		extends_node = _maybe_subtree(decl, "class_extends")
		implements_node = _maybe_subtree(decl, "class_implements")
		modifiers = [_modifier_value(m) for m in _subtrees(decl, "class_modifier")]
		methods: List[MethodDecl] = []
		properties: List[PropertyDecl] = []
		for member in _subtree(decl, "class_body").children:
			if not isinstance(member, Tree):
				continue
			if _name(member) == "method_decl":
				methods.append(self._build_method(member))
			elif _name(member) == "property_decl":
				properties.append(self._build_property(member))
		return ClassDecl(
			name=name_tok.value if name_tok is not None else None,
			decorators=self._build_decorators(_maybe_subtree(tree, "decorators")),
			type_params=self._build_type_params(_maybe_subtree(decl, "type_params")),
			extends=self._build_type_ref(_subtree(extends_node, "type_ref")) if extends_node is not None else None,
			implements=[self._build_type_ref(t) for t in _subtrees(implements_node, "type_ref")] if implements_node else [],
			methods=methods,
			properties=properties,
			loc=_loc(decl),
			exported=_has_token(tree, "EXPORT"),
			is_default=_has_token(tree, "DEFAULT"),
			is_abstract="abstract" in modifiers,
		)

	def _build_method(self, tree: Tree) -> MethodDecl:
		params_node = _maybe_subtree(tree, "params")
		return_node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) in _TYPE_NODES), None)
		body = _subtree(tree, "method_body")
		return MethodDecl(
			name=_token(tree, "NAME").value,
			decorators=self._build_decorators(_maybe_subtree(tree, "decorators")),
			modifiers=self._build_modifiers(_maybe_subtree(tree, "modifiers")),
			type_params=self._build_type_params(_maybe_subtree(tree, "type_params")),
			params=[self._build_param(p) for p in _subtrees(params_node, "param")] if params_node else [],
			return_type=self.build_type(return_node) if return_node is not None else None,
			loc=_loc(tree),
			has_body=bool(body.children),
		)

	def _build_property(self, tree: Tree) -> PropertyDecl:
		type_node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) in _TYPE_NODES), None)
		return PropertyDecl(
			name=_token(tree, "NAME").value,
			decorators=self._build_decorators(_maybe_subtree(tree, "decorators")),
			modifiers=self._build_modifiers(_maybe_subtree(tree, "modifiers")),
			type_expr=self.build_type(type_node) if type_node is not None else None,
			loc=_loc(tree),
		)

	def _build_param(self, tree: Tree) -> Param:
		type_node = next((c for c in tree.children if isinstance(c, Tree) and _name(c) in _TYPE_NODES), None)
		return Param(
			name=_token(tree, "NAME").value,
			type_expr=self.build_type(type_node) if type_node is not None else None,
			decorators=self._build_decorators(_maybe_subtree(tree, "decorators")),
			loc=_loc(tree),
			optional=_has_token(tree, "QMARK"),
			rest=_has_token(tree, "ELLIPSIS"),
			modifiers=self._build_modifiers(_maybe_subtree(tree, "modifiers")),
		)

	def _build_decorators(self, tree: Tree | None) -> List[Decorator]:
		if tree is None:
			return []
		decorators: List[Decorator] = []
		for node in _subtrees(tree, "decorator"):
			call = _maybe_subtree(node, "decorator_call")
			args: List[DecoratorArg] = []
			if call is not None:
				for arg in _subtrees(call, "arg_expr"):
					only = arg.children[0] if len(arg.children) == 1 else None
					if isinstance(only, Token) and only.type == "STRING":
						args.append(DecoratorArg(text=only.value, value=_decode_string_token(only)))
					else:
						args.append(DecoratorArg(text=self._text(arg)))
			decorators.append(
				Decorator(
					name=_qualified_name(_subtree(node, "qualified_name")),
					args=args,
					loc=_loc(node),
					is_call=call is not None,
				)
			)
		return decorators

	def _build_modifiers(self, tree: Tree | None) -> List[str]:
		if tree is None:
			return []
		return [_modifier_value(m) for m in _subtrees(tree, "modifier")]

	def _build_type_params(self, tree: Tree | None) -> List[TypeParam]:
		if tree is None:
			return []
		params: List[TypeParam] = []
		for node in _subtrees(tree, "type_param"):
			# type_param: NAME (EXTENDS type_expr)? ("=" type_expr)?
			constraint: Optional[TypeExpr] = None
			default: Optional[TypeExpr] = None
			after_extends = False
			for child in node.children:
				if isinstance(child, Token):
					after_extends = child.type == "EXTENDS"
					continue
				if after_extends and constraint is None:
					constraint = self.build_type(child)
					after_extends = False
				else:
					default = self.build_type(child)
			params.append(TypeParam(name=_token(node, "NAME").value, constraint=constraint, default=default))
		return params

	# --- members ------------------------------------------------------------------

	def _build_members(self, tree: Tree) -> List[TypeMember]:
		return [self._build_member(c) for c in tree.children if isinstance(c, Tree) and _name(c) in _MEMBER_NODES]

	def _build_member(self, tree: Tree) -> TypeMember:
		kind = _name(tree)
		types = [c for c in tree.children if isinstance(c, Tree) and _name(c) in _TYPE_NODES]
		if kind == "property_sig":
			return PropertySig(
				name=_property_key(_subtree(tree, "property_key")),
				type_expr=self.build_type(types[0]),
				loc=_loc(tree),
				optional=_has_token(tree, "QMARK"),
				readonly=_has_token(tree, "READONLY"),
			)
		if kind == "index_sig":
			return IndexSig(
				key_name=_token(tree, "NAME").value,
				key_type=self.build_type(types[0]),
				type_expr=self.build_type(types[1]),
				loc=_loc(tree),
				readonly=_has_token(tree, "READONLY"),
			)
		params_node = _maybe_subtree(tree, "sig_params")
		return MethodSig(
			name=_property_key(_subtree(tree, "property_key")),
			type_params=self._build_type_params(_maybe_subtree(tree, "type_params")),
			params=[self._build_sig_param(p) for p in _subtrees(params_node, "sig_param")] if params_node else [],
			return_type=self.build_type(types[0]) if types else None,
			loc=_loc(tree),
			optional=_has_token(tree, "QMARK"),
		)

	def _build_sig_param(self, tree: Tree) -> SigParam:
		type_node = next((c for c in tree.children if isinstance(c, Tree)), None)
		return SigParam(
			name=_token(tree, "NAME").value,
			type_expr=self.build_type(type_node) if type_node is not None else None,
			optional=_has_token(tree, "QMARK"),
			rest=_has_token(tree, "ELLIPSIS"),
		)

	# --- type expressions -----------------------------------------------------------

	def build_type(self, tree: Tree) -> TypeExpr:
		kind = _name(tree)
		loc = _loc(tree)
		text = self._text(tree)
		subtrees = [c for c in tree.children if isinstance(c, Tree)]
		if kind == "type_ref":
			return self._build_type_ref(tree)
		if kind == "union_type":
			return UnionType(members=[self.build_type(c) for c in subtrees], loc=loc, text=text)
		if kind == "intersection_type":
			return IntersectionType(members=[self.build_type(c) for c in subtrees], loc=loc, text=text)
		if kind == "type_operator":
			op_tok = next(c for c in tree.children if isinstance(c, Token))
			return TypeOperator(op=op_tok.value, inner=self.build_type(subtrees[0]), loc=loc, text=text)
		if kind == "array_type":
			return ArrayType(element=self.build_type(subtrees[0]), loc=loc, text=text)
		if kind == "indexed_access_type":
			return IndexedAccessType(
				object_type=self.build_type(subtrees[0]),
				index_type=self.build_type(subtrees[1]),
				loc=loc,
				text=text,
			)
		if kind == "paren_type":
			return ParenType(inner=self.build_type(subtrees[0]), loc=loc, text=text)
		if kind == "fn_type":
			params_node = _maybe_subtree(tree, "fn_params")
			params = [self._build_sig_param(p) for p in _subtrees(params_node, "fn_param")] if params_node else []
			return FunctionType(params=params, return_type=self.build_type(subtrees[-1]), loc=loc, text=text)
		if kind == "type_literal":
			return TypeLiteral(members=self._build_members(tree), loc=loc, text=text)
		if kind == "tuple_type":
			return TupleType(elements=[self.build_type(c) for c in subtrees], loc=loc, text=text)
		if kind == "type_query":
			return TypeQuery(name=_qualified_name(subtrees[0]), loc=loc, text=text)
		if kind == "conditional_type":
			check, extends, when_true, when_false = (self.build_type(c) for c in subtrees)
			return ConditionalType(
				check_type=check,
				extends_type=extends,
				true_type=when_true,
				false_type=when_false,
				loc=loc,
				text=text,
			)
		if kind == "infer_type":
			return InferType(name=_token(tree, "NAME").value, loc=loc, text=text)
		if kind == "mapped_type":
			# "{" [+-]? READONLY? "[" NAME IN constraint (AS name_type)? "]" [+-]? QMARK? ":" value "}"
			types = [self.build_type(c) for c in subtrees]
			return MappedType(
				key_name=_token(tree, "NAME").value,
				constraint=types[0],
				name_type=types[1] if _has_token(tree, "AS") else None,
				value_type=types[-1],
				loc=loc,
				text=text,
				readonly=_has_token(tree, "READONLY"),
				optional=_has_token(tree, "QMARK"),
			)
		if kind == "template_literal_type":
			return TemplateLiteralType(loc=loc, text=text)
		if kind == "literal_type":
			tok = tree.children[0]
			if tok.type == "STRING":
				return LiteralType(value=_decode_string_token(tok), loc=loc, text=text)
			return LiteralType(value=_number_value(text), loc=loc, text=text)
		raise ValueError(f"unexpected type node '{kind}'")

	def _build_type_ref(self, tree: Tree) -> TypeExpr:
		names = [tok.value for tok in _subtree(tree, "qualified_name").children if isinstance(tok, Token)]
		args_node = _maybe_subtree(tree, "type_args")
		args = [self.build_type(c) for c in args_node.children if isinstance(c, Tree)] if args_node else []
		loc = _loc(tree)
		text = self._text(tree)
		if len(names) == 1 and not args:
			if names[0] in KEYWORD_TYPES:
				return KeywordType(name=names[0], loc=loc, text=text)
			if names[0] in {"true", "false"}:
				return LiteralType(value=names[0] == "true", loc=loc, text=text)
		return TypeRef(
			name=names[-1],
			args=args,
			loc=loc,
			text=text,
			qualifier=".".join(names[:-1]) or None,
		)


def _number_value(text: str) -> object:
	cleaned = text.replace("_", "").replace(" ", "").rstrip("n")
	try:
		return int(cleaned, 0)
	except ValueError:
		return float(cleaned)


def _qualified_name(tree: Tree) -> str:
	return ".".join(tok.value for tok in tree.children if isinstance(tok, Token))


def _property_key(tree: Tree) -> str:
	tok = tree.children[0]
	if tok.type == "STRING":
		return _decode_string_token(tok)
	return tok.value


def _modifier_value(tree: Tree) -> str:
	return next(tok.value for tok in tree.children if isinstance(tok, Token))


def _subtrees(tree: Tree | None, name: str) -> List[Tree]:
	if tree is None:
		return []
	return [c for c in tree.children if isinstance(c, Tree) and _name(c) == name]


def _maybe_subtree(tree: Tree, name: str) -> Optional[Tree]:
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) == name), None)


def _subtree(tree: Tree, name: str) -> Tree:
	node = _maybe_subtree(tree, name)
	if node is None:
		raise ValueError(f"'{_name(tree)}' node missing '{name}'")
	return node


def _tokens(tree: Tree, type_name: str) -> List[Token]:
	return [c for c in tree.children if isinstance(c, Token) and c.type == type_name]


def _maybe_token(tree: Tree, type_name: str) -> Optional[Token]:
	return next((c for c in tree.children if isinstance(c, Token) and c.type == type_name), None)


def _token(tree: Tree, type_name: str) -> Token:
	tok = _maybe_token(tree, type_name)
	if tok is None:
		raise ValueError(f"'{_name(tree)}' node missing {type_name} token")
	return tok


def _has_token(tree: Tree, type_name: str) -> bool:
	return _maybe_token(tree, type_name) is not None


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=getattr(meta, "line", 0), column=getattr(meta, "column", 0))


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_module", "parse_type_expr", "KEYWORD_TYPES"]
