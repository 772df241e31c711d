# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Route method interpretation.

A controller method becomes a `RouteMethod` when it carries exactly one HTTP
verb annotation (`@Get`, `@Post`, `@Put`, `@Delete`, matched
case-insensitively) with at most one string-literal argument, the route
template. Every `{name}` placeholder in the template must be bound to a
method parameter of the same name, and at most one parameter may carry
`@Body()`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional

from tsoaclient.core.errors import AsyncReturnTypeError, InvalidRouteMethodError
from tsoaclient.parser.ast import KeywordType, MethodDecl, Param, TypeExpr, TypeRef

from .annotations import find_annotations, read_annotations

if TYPE_CHECKING:
	from .controller import Controller

# A placeholder is a brace-delimited run of one or more non-brace characters.
PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

BODY_ANNOTATION = "Body"
ASYNC_WRAPPER = "Promise"


class HttpVerb(str, Enum):
	GET = "GET"
	POST = "POST"
	PUT = "PUT"
	DELETE = "DELETE"

	@classmethod
	def from_annotation(cls, name: str) -> Optional["HttpVerb"]:
		return next((verb for verb in cls if verb.value == name.upper()), None)


@dataclass(frozen=True)
class RouteMethod:
	"""
	One request-handling operation of a controller.

	`path_params` is a read-only mapping of placeholder names to their
	parameters, in order of first appearance in `route_template`. `return_type` is already normalized: the
	`Promise` argument for async methods, `void` when nothing is declared.
	"""

	name: str
	http_verb: HttpVerb
	route_template: Optional[str]
	path_params: Mapping[str, Param]
	body_param: Optional[Param]
	return_type: TypeExpr
	controller_name: str
	controller_route: str
	is_async: bool = False
	declaration: Optional[MethodDecl] = field(default=None, compare=False, repr=False)


def extract_placeholders(template: str) -> List[str]:
	"""Placeholder names of a route template, left to right, duplicates kept."""
	return PLACEHOLDER_RE.findall(template)


def interpret_method(controller: "Controller", method: MethodDecl) -> RouteMethod:
	file = controller.module.path if controller.module is not None else None

	def invalid(reason: str) -> InvalidRouteMethodError:
		return InvalidRouteMethodError(
			f"invalid route method '{controller.name}.{method.name}': {reason}",
			loc=method.loc,
			file=file,
		)

	annotations = read_annotations(method.decorators)
	verb_annotations = [a for a in annotations if HttpVerb.from_annotation(a.name) is not None]
	if not verb_annotations:
		raise invalid("missing HTTP verb annotation")
	if len(verb_annotations) > 1:
		names = ", ".join(f"@{a.name}" for a in verb_annotations)
		raise invalid(f"expected exactly one HTTP verb annotation, found {names}")
	verb_annotation = verb_annotations[0]
	http_verb = HttpVerb.from_annotation(verb_annotation.name)
	assert http_verb is not None
	if len(verb_annotation.arguments) > 1:
		raise invalid(f"@{verb_annotation.name} takes at most one argument")
	if not verb_annotation.literal:
		raise invalid(f"@{verb_annotation.name} argument must be a string literal")
	route_template = verb_annotation.arguments[0] if verb_annotation.arguments else None

	body_params = [p for p in method.params if find_annotations(read_annotations(p.decorators), BODY_ANNOTATION)]
	if len(body_params) > 1:
		raise invalid(f"more than one @{BODY_ANNOTATION} parameter")
	body_param = body_params[0] if body_params else None

	path_params: Dict[str, Param] = {}
	if route_template is not None:
		params_by_name = {p.name: p for p in method.params}
		for placeholder in extract_placeholders(route_template):
			param = params_by_name.get(placeholder)
			if param is None:
				raise invalid(f"route placeholder '{{{placeholder}}}' has no matching parameter")
			path_params.setdefault(placeholder, param)

	return RouteMethod(
		name=method.name,
		http_verb=http_verb,
		route_template=route_template,
		path_params=MappingProxyType(path_params),
		body_param=body_param,
		return_type=_normalize_return_type(method, file=file, controller_name=controller.name),
		controller_name=controller.name,
		controller_route=controller.route,
		is_async=method.is_async,
		declaration=method,
	)


def _normalize_return_type(method: MethodDecl, *, file, controller_name: str) -> TypeExpr:
	declared = method.return_type
	if declared is None:
		return KeywordType(name="void", loc=method.loc, text="void")
	if not method.is_async:
		return declared
	if (
		not isinstance(declared, TypeRef)
		or declared.qualifier is not None
		or declared.name != ASYNC_WRAPPER
		or len(declared.args) != 1
	):
		raise AsyncReturnTypeError(
			f"async route method '{controller_name}.{method.name}' must return {ASYNC_WRAPPER}<T>, "
			f"not '{declared.text}'",
			loc=declared.loc,
			file=file,
		)
	return declared.args[0]


__all__ = [
	"PLACEHOLDER_RE",
	"HttpVerb",
	"RouteMethod",
	"extract_placeholders",
	"interpret_method",
]
