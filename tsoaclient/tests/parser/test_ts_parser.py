# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from tsoaclient.parser import parse_module, parse_type_expr
from tsoaclient.parser.ast import (
	ArrayType,
	ClassDecl,
	ConditionalType,
	EnumDecl,
	FunctionType,
	IndexedAccessType,
	IndexSig,
	InferType,
	InterfaceDecl,
	IntersectionType,
	KeywordType,
	LiteralType,
	MappedType,
	MethodSig,
	OtherStmt,
	ParenType,
	PropertySig,
	TemplateLiteralType,
	TupleType,
	TypeAliasDecl,
	TypeLiteral,
	TypeOperator,
	TypeQuery,
	TypeRef,
	UnionType,
)


def _decls(source: str) -> dict:
	module = parse_module(source)
	return {getattr(s, "name", None): s for s in module.statements}


def test_parse_import_forms():
	module = parse_module(
		"""
import { A, type B, C as D } from "./x";
import E, { F } from './y';
import * as ns from "./z";
import type { G } from "./g";
import "./side";
"""
	)
	imports = module.imports
	assert [i.module_specifier for i in imports] == ["./x", "./y", "./z", "./g", "./side"]

	named = imports[0]
	assert [(s.name, s.alias, s.type_only) for s in named.specifiers] == [
		("A", None, False),
		("B", None, True),
		("C", "D", False),
	]
	assert named.find("D").name == "C"
	assert named.find("C") is None

	assert imports[1].default_name == "E"
	assert [s.name for s in imports[1].specifiers] == ["F"]
	assert imports[2].namespace == "ns"
	assert imports[3].type_only is True
	assert imports[4].specifiers == []


def test_parse_export_forms():
	module = parse_module(
		"""
export { A, B as C } from "./x";
export * from "./y";
export * as ns from "./z";
interface Local { id: string }
export { Local };
"""
	)
	exports = module.exports
	assert len(exports) == 4
	assert exports[0].module_specifier == "./x"
	assert exports[0].find("C").name == "B"
	assert exports[0].is_bare is False
	assert exports[1].specifiers is None
	assert exports[1].is_bare is True
	assert exports[2].namespace == "ns"
	assert exports[2].is_bare is False
	assert exports[3].module_specifier is None
	assert [s.name for s in exports[3].specifiers] == ["Local"]


def test_parse_interface_members_and_heritage():
	decls = _decls(
		"""
/** A user. */
export interface User<T extends object = {}> extends Base, Audited<T> {
	readonly id: string;
	name?: string
	tags: Tag[],
	[key: string]: unknown;
	greet(other: User, ...rest: string[]): void;
	"quoted-key": number;
}
"""
	)
	user = decls["User"]
	assert isinstance(user, InterfaceDecl)
	assert user.exported is True
	assert user.text.startswith("interface User<T extends object = {}>")
	assert user.text.endswith("}")

	(param,) = user.type_params
	assert param.name == "T"
	assert isinstance(param.constraint, KeywordType) and param.constraint.name == "object"
	assert isinstance(param.default, TypeLiteral) and param.default.members == []

	assert [h.name for h in user.heritage] == ["Base", "Audited"]
	assert isinstance(user.heritage[1].args[0], TypeRef)

	id_sig, name_sig, tags_sig, index_sig, greet_sig, quoted_sig = user.members
	assert isinstance(id_sig, PropertySig) and id_sig.readonly is True
	assert name_sig.optional is True
	assert isinstance(tags_sig.type_expr, ArrayType)
	assert tags_sig.type_expr.element.name == "Tag"
	assert isinstance(index_sig, IndexSig) and index_sig.key_name == "key"
	assert isinstance(greet_sig, MethodSig)
	assert [(p.name, p.rest) for p in greet_sig.params] == [("other", False), ("rest", True)]
	assert isinstance(greet_sig.return_type, KeywordType)
	assert quoted_sig.name == "quoted-key"


def test_parse_type_alias_shapes():
	decls = _decls(
		"""
export type Status =
	| "active"
	| "disabled";
type Pair = [string, number];
type Keys = keyof User;
type Lookup = Record<string, User[]>;
type Neg = -1 | 0x1F | true;
type Handler = (event: Event) => void;
type Q = typeof config;
type Idx = User["id"];
type Both = (A & B) | null;
"""
	)
	status = decls["Status"]
	assert isinstance(status, TypeAliasDecl) and status.exported is True
	assert status.text.startswith("type Status =")
	assert status.text.endswith('"disabled"')
	assert isinstance(status.type_expr, UnionType)
	assert [m.value for m in status.type_expr.members] == ["active", "disabled"]

	assert decls["Pair"].exported is False
	assert isinstance(decls["Pair"].type_expr, TupleType)
	assert isinstance(decls["Keys"].type_expr, TypeOperator)
	assert decls["Keys"].type_expr.op == "keyof"

	lookup = decls["Lookup"].type_expr
	assert isinstance(lookup, TypeRef) and lookup.name == "Record"
	assert isinstance(lookup.args[0], KeywordType)
	assert isinstance(lookup.args[1], ArrayType)

	neg = decls["Neg"].type_expr
	assert [m.value for m in neg.members] == [-1, 31, True]
	assert all(isinstance(m, LiteralType) for m in neg.members)

	assert isinstance(decls["Handler"].type_expr, FunctionType)
	assert decls["Handler"].type_expr.params[0].name == "event"
	assert isinstance(decls["Q"].type_expr, TypeQuery)
	assert decls["Q"].type_expr.name == "config"
	assert isinstance(decls["Idx"].type_expr, IndexedAccessType)

	both = decls["Both"].type_expr
	assert isinstance(both.members[0], ParenType)
	assert isinstance(both.members[0].inner, IntersectionType)
	assert isinstance(both.members[1], KeywordType) and both.members[1].name == "null"


def test_parse_mapped_conditional_and_template_types():
	decls = _decls(
		"""
export type Flags<K extends string> = { readonly [P in K]?: boolean };
export type Getters<T> = { -readonly [P in keyof T as `get${P}`]-?: T[P] };
export type Unwrap<T> = T extends Promise<infer U> ? U : T;
export type EventName = `on${string}`;
export interface User { id: string }
"""
	)
	flags = decls["Flags"].type_expr
	assert isinstance(flags, MappedType)
	assert flags.key_name == "P"
	assert isinstance(flags.constraint, TypeRef) and flags.constraint.name == "K"
	assert flags.name_type is None
	assert isinstance(flags.value_type, KeywordType) and flags.value_type.name == "boolean"
	assert flags.readonly is True and flags.optional is True

	getters = decls["Getters"].type_expr
	assert isinstance(getters, MappedType)
	assert isinstance(getters.constraint, TypeOperator) and getters.constraint.op == "keyof"
	assert isinstance(getters.name_type, TemplateLiteralType)
	assert getters.name_type.text == "`get${P}`"
	assert isinstance(getters.value_type, IndexedAccessType)

	unwrap = decls["Unwrap"].type_expr
	assert isinstance(unwrap, ConditionalType)
	assert unwrap.check_type.name == "T"
	assert unwrap.extends_type.name == "Promise"
	assert isinstance(unwrap.extends_type.args[0], InferType)
	assert unwrap.extends_type.args[0].name == "U"
	assert unwrap.true_type.name == "U"
	assert unwrap.false_type.name == "T"

	event = decls["EventName"].type_expr
	assert isinstance(event, TemplateLiteralType)
	assert event.text == "`on${string}`"
	assert isinstance(decls["User"], InterfaceDecl)


def test_parse_nested_conditional_type():
	expr = parse_type_expr('T extends string ? "s" : T extends number ? "n" : never')
	assert isinstance(expr, ConditionalType)
	assert expr.true_type.value == "s"
	assert isinstance(expr.false_type, ConditionalType)
	assert expr.false_type.false_type.name == "never"


def test_parse_statements_ending_at_line_breaks():
	module = parse_module(
		"""
export const VERSION = 1
interface User { id: string }
const handlers = {
	list: () => [],
}
declare const config: Config
export type Role =
	| "admin"
	| "user"
export interface Page { total: number }
export default VERSION
"""
	)
	summary = [(type(s).__name__, getattr(s, "name", None)) for s in module.statements]
	assert summary == [
		("OtherStmt", "VERSION"),
		("InterfaceDecl", "User"),
		("OtherStmt", "handlers"),
		("OtherStmt", "config"),
		("TypeAliasDecl", "Role"),
		("InterfaceDecl", "Page"),
		("OtherStmt", None),
	]
	role = module.statements[4]
	assert role.text.endswith('| "user"')
	assert [m.value for m in role.type_expr.members] == ["admin", "user"]


def test_parse_class_properties_ending_at_line_breaks():
	(cls,) = parse_module(
		"""
@Route("users")
export class UserController extends Controller {
	private prefix = "x"
	@Get("{id}")
	public getUser(@Path() id: string): User { return null; }
	private readonly limit = 10
	public list(): User[] { return []; }
	private tail = () => {
		return 1
	}
}
"""
	).classes
	assert [m.name for m in cls.methods] == ["getUser", "list"]
	assert [p.name for p in cls.properties] == ["prefix", "limit", "tail"]
	assert [d.name for d in cls.methods[0].decorators] == ["Get"]
	assert cls.methods[1].modifiers == ["public"]
	assert cls.properties[1].modifiers == ["private", "readonly"]


def test_parse_enums():
	decls = _decls(
		"""
export enum Role { Admin = "admin", User = "user", }
const enum Flags { A = 1, B = -2, C }
"""
	)
	role = decls["Role"]
	assert isinstance(role, EnumDecl) and role.exported is True
	assert [(m.name, m.value) for m in role.members] == [("Admin", '"admin"'), ("User", '"user"')]
	flags = decls["Flags"]
	assert flags.is_const is True and flags.exported is False
	assert [(m.name, m.value) for m in flags.members] == [("A", "1"), ("B", "-2"), ("C", None)]
	assert flags.text.startswith("const enum Flags")


def test_parse_controller_class():
	module = parse_module(
		"""
import { Body, Controller, Get, Path, Post, Route } from "tsoa";
import { User, UserCreate } from "./models/user";

const BASE = "users";

@Route("users")
@Tags("users", 'admin')
export class UserController extends Controller {
	private cache = new Map<string, User>();
	static instances: number;

	constructor(private readonly service: UserService) {
		super();
	}

	@Get("{id}")
	public async getUser(@Path() id: string, @Query() type?: string): Promise<User> {
		const found = this.cache.get(id);
		if (!found) { throw new Error(`missing ${id} {x}`); }
		return found;
	}

	@Post()
	@SuccessResponse("201", "Created")
	@Response<ErrorBody>(404, "Not found")
	public create(@Body() body: UserCreate): User {
		return { ...body, id: "{}" } as User;
	}

	@Deprecated
	@Get()
	@Security("jwt", ["admin"])
	list(limit = 10) { return []; }
}

export default UserController;
"""
	)
	(cls,) = module.classes
	assert isinstance(cls, ClassDecl)
	assert cls.name == "UserController"
	assert cls.exported is True
	assert cls.extends.name == "Controller"
	assert [d.name for d in cls.decorators] == ["Route", "Tags"]
	assert cls.decorators[0].args[0].value == "users"
	assert [a.value for a in cls.decorators[1].args] == ["users", "admin"]

	assert [p.name for p in cls.properties] == ["cache", "instances"]
	assert cls.properties[1].modifiers == ["static"]
	assert [m.name for m in cls.methods] == ["constructor", "getUser", "create", "list"]

	ctor = cls.methods[0]
	assert ctor.is_constructor
	assert ctor.params[0].modifiers == ["private", "readonly"]

	get_user = cls.methods[1]
	assert get_user.is_async is True
	assert get_user.modifiers == ["public", "async"]
	assert [p.name for p in get_user.params] == ["id", "type"]
	assert get_user.params[0].decorators[0].name == "Path"
	assert get_user.params[1].optional is True
	assert get_user.return_type.name == "Promise"
	assert get_user.return_type.args[0].name == "User"

	create = cls.methods[2]
	assert [d.name for d in create.decorators] == ["Post", "SuccessResponse", "Response"]
	assert create.decorators[0].args == []
	assert create.decorators[0].is_call is True
	assert create.params[0].decorators[0].name == "Body"
	assert create.params[0].type_expr.name == "UserCreate"

	listing = cls.methods[3]
	assert listing.decorators[0].is_call is False
	security = listing.decorators[2]
	assert security.args[0].value == "jwt"
	assert security.args[1].value is None
	assert security.args[1].text == '["admin"]'
	assert listing.params[0].type_expr is None
	assert listing.return_type is None

	others = [s for s in module.statements if isinstance(s, OtherStmt)]
	assert [(o.kind, o.name) for o in others] == [("variable", "BASE"), ("default_export", None)]


def test_parse_ignores_comments_and_keeps_functions():
	module = parse_module(
		"""
// leading comment
/* block { comment */
export type A = string; // trailing
export async function handler(req: Request): Promise<void> {
	return;
}
"""
	)
	kinds = [type(s).__name__ for s in module.statements]
	assert kinds == ["TypeAliasDecl", "OtherStmt"]
	assert module.statements[1].kind == "function"
	assert module.statements[1].exported is True


def test_parse_type_expr_fragment():
	expr = parse_type_expr("Array<Page<User>>[]")
	assert isinstance(expr, ArrayType)
	assert expr.element.name == "Array"
	assert expr.element.args[0].args[0].name == "User"
	assert expr.text == "Array<Page<User>>[]"

	literal = parse_type_expr("{ owner: Owner; meta?: { tags: Tag[] } }")
	assert isinstance(literal, TypeLiteral)
	assert [m.name for m in literal.members] == ["owner", "meta"]


def test_parse_syntax_error_raises():
	with pytest.raises(UnexpectedInput):
		parse_module("export interface { }")


def test_parse_records_locations():
	module = parse_module("\n\nexport interface User {\n\tid: string;\n}\n")
	(user,) = module.statements
	assert isinstance(user, InterfaceDecl)
	assert user.loc.line == 3
	assert user.members[0].loc.line == 4
