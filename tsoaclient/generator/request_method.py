# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Request method emission.

Each `RouteMethod` becomes a static service method taking one `data` object
(one `string` field per path parameter, plus `requestBody` when the route has
a body) and returning `CancelablePromise<T>` from the runtime `request`
helper. Placeholders stay in the URL; the runtime substitutes them from the
`path` option at call time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from tsoaclient.interpreter.route_method import RouteMethod

from .importable import Importable, ResolvedImportable, UnresolvedImportable

CANCELABLE_PROMISE = ResolvedImportable(name="CancelablePromise", path="./core/CancelablePromise")
OPEN_API = ResolvedImportable(name="OpenAPI", path="./core/OpenAPI")
REQUEST = ResolvedImportable(name="request", path="./core/request", alias="__request")

DATA_PARAM = "data"
BODY_FIELD = "requestBody"
DEFAULT_ERRORS: Dict[int, str] = {401: "Unauthorized"}

_SLASH_RUN_RE = re.compile(r"/{2,}")


@dataclass
class DataField:
	name: str
	type_text: str
	optional: bool = False


@dataclass
class RequestOptions:
	method: str
	url: str
	path: Dict[str, str] = field(default_factory=dict)
	body: Optional[str] = None
	errors: Dict[int, str] = field(default_factory=lambda: dict(DEFAULT_ERRORS))


@dataclass
class MethodDeclaration:
	"""A `public static` service method; no `data` parameter when `data_fields` is empty."""

	name: str
	data_fields: List[DataField]
	return_type: str
	options: RequestOptions


def build_url(controller_route: str, route_template: Optional[str]) -> str:
	"""`/` + controller route + optional `/` + method route; repeated and trailing slashes dropped."""
	url = "/" + controller_route
	if route_template is not None:
		url += "/" + route_template
	url = _SLASH_RUN_RE.sub("/", url)
	if len(url) > 1 and url.endswith("/"):
		url = url[:-1]
	return url


class RequestMethod:
	def __init__(self, route_method: RouteMethod) -> None:
		self.route_method = route_method
		self.required_imports: List[Importable] = [CANCELABLE_PROMISE, OPEN_API, REQUEST]
		body = route_method.body_param
		if body is not None and body.type_expr is not None:
			self.required_imports.append(UnresolvedImportable(type_expr=body.type_expr))
		self.required_imports.append(UnresolvedImportable(type_expr=route_method.return_type))

	@property
	def url(self) -> str:
		return build_url(self.route_method.controller_route, self.route_method.route_template)

	def get_declaration(self) -> MethodDeclaration:
		route_method = self.route_method
		data_fields = [DataField(name=name, type_text="string") for name in route_method.path_params]
		options = RequestOptions(
			method=route_method.http_verb.value,
			url=self.url,
			path={name: f"{DATA_PARAM}.{name}" for name in route_method.path_params},
		)
		body = route_method.body_param
		if body is not None:
			body_type = body.type_expr.text if body.type_expr is not None else "any"
			data_fields.append(DataField(name=BODY_FIELD, type_text=body_type, optional=body.optional))
			options.body = f"{DATA_PARAM}.{BODY_FIELD}"
		return MethodDeclaration(
			name=route_method.name,
			data_fields=data_fields,
			return_type=f"{CANCELABLE_PROMISE.local_name}<{route_method.return_type.text}>",
			options=options,
		)


__all__ = [
	"CANCELABLE_PROMISE",
	"OPEN_API",
	"REQUEST",
	"DATA_PARAM",
	"BODY_FIELD",
	"DEFAULT_ERRORS",
	"DataField",
	"RequestOptions",
	"MethodDeclaration",
	"RequestMethod",
	"build_url",
]
