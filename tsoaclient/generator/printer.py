# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
TypeScript text for the generated modules.

Declarations copied into the types module keep their source text verbatim
and are always exported, whatever their visibility in the origin module.
"""

from __future__ import annotations

import json
import re
from typing import Iterable, List

from tsoaclient.parser.ast import EnumDecl, InterfaceDecl, TypeAliasDecl, TypeDecl

from .importable import ImportDeclaration, ResolvedImportable
from .request_method import DATA_PARAM, MethodDeclaration, REQUEST, OPEN_API
from .service import ServiceDeclaration

INDENT = "    "
HEADER = "// This file is auto-generated by tsoa-client. Do not edit it by hand.\n"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][\w$]*$")


def string_literal(value: str) -> str:
	return json.dumps(value, ensure_ascii=False)


def property_name(name: str) -> str:
	return name if _IDENTIFIER_RE.match(name) else string_literal(name)


def format_import_specifier(importable: ResolvedImportable) -> str:
	if importable.alias is not None:
		return f"{importable.name} as {importable.alias}"
	return importable.name


def format_import(decl: ImportDeclaration) -> str:
	names = ", ".join(format_import_specifier(spec) for spec in decl.specifiers)
	return f"import {{ {names} }} from {string_literal(decl.path)};"


def format_method(decl: MethodDeclaration, *, indent: str = INDENT) -> List[str]:
	inner = indent + INDENT
	lines: List[str] = []
	if decl.data_fields:
		lines.append(f"{indent}public static {decl.name}({DATA_PARAM}: {{")
		for data_field in decl.data_fields:
			marker = "?" if data_field.optional else ""
			lines.append(f"{inner}{property_name(data_field.name)}{marker}: {data_field.type_text};")
		lines.append(f"{indent}}}): {decl.return_type} {{")
	else:
		lines.append(f"{indent}public static {decl.name}(): {decl.return_type} {{")

	options = decl.options
	body = inner + INDENT
	lines.append(f"{inner}return {REQUEST.local_name}({OPEN_API.local_name}, {{")
	lines.append(f"{body}method: {string_literal(options.method)},")
	lines.append(f"{body}url: {string_literal(options.url)},")
	if options.path:
		lines.append(f"{body}path: {{")
		for name, value in options.path.items():
			lines.append(f"{body}{INDENT}{property_name(name)}: {value},")
		lines.append(f"{body}}},")
	if options.body is not None:
		lines.append(f"{body}body: {options.body},")
	lines.append(f"{body}errors: {{")
	for code, message in options.errors.items():
		lines.append(f"{body}{INDENT}{code}: {string_literal(message)},")
	lines.append(f"{body}}},")
	lines.append(f"{inner}}});")
	lines.append(f"{indent}}}")
	return lines


def format_service(decl: ServiceDeclaration) -> str:
	lines = [f"export class {decl.name} {{"]
	for index, method in enumerate(decl.methods):
		if index:
			lines.append("")
		lines.extend(format_method(method))
	lines.append("}")
	return "\n".join(lines)


def format_type_declaration(decl: TypeDecl) -> str:
	if not isinstance(decl, (InterfaceDecl, TypeAliasDecl, EnumDecl)):
		raise TypeError(f"not a type declaration: {type(decl).__name__}")
	text = decl.text.strip()
	if isinstance(decl, TypeAliasDecl) and not text.endswith(";"):
		text += ";"
	return f"export {text}"


def print_services_module(imports: Iterable[ImportDeclaration], services: Iterable[ServiceDeclaration]) -> str:
	parts = [HEADER]
	import_lines = [format_import(decl) for decl in imports]
	if import_lines:
		parts.append("\n".join(import_lines) + "\n")
	for service in services:
		parts.append(format_service(service) + "\n")
	return "\n".join(parts)


def print_types_module(declarations: Iterable[TypeDecl]) -> str:
	parts = [HEADER]
	for decl in declarations:
		parts.append(format_type_declaration(decl) + "\n")
	return "\n".join(parts)


__all__ = [
	"format_import",
	"format_method",
	"format_service",
	"format_type_declaration",
	"print_services_module",
	"print_types_module",
	"string_literal",
]
