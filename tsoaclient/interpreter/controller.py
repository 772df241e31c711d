# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple

from tsoaclient.core.diagnostics import Diagnostic
from tsoaclient.core.errors import InvalidControllerError, InvalidRouteMethodError
from tsoaclient.parser.ast import ClassDecl, Module

from .annotations import find_annotations, read_annotations
from .route_method import RouteMethod, interpret_method

CONTROLLER_BASE = "Controller"
ROUTE_ANNOTATION = "Route"


@dataclass(frozen=True)
class Controller:
	name: str
	route: str
	methods: Tuple[RouteMethod, ...] = ()
	warnings: Tuple[Diagnostic, ...] = field(default=(), compare=False)
	declaration: Optional[ClassDecl] = field(default=None, compare=False, repr=False)
	module: Optional[Module] = field(default=None, compare=False, repr=False)


def is_controller_candidate(class_decl: ClassDecl) -> bool:
	"""True when a class carries a `@Route` annotation or extends `Controller`."""
	if class_decl.extends is not None and class_decl.extends.name == CONTROLLER_BASE:
		return True
	return bool(find_annotations(read_annotations(class_decl.decorators), ROUTE_ANNOTATION))


def interpret_controller(
	class_decl: ClassDecl,
	*,
	module: Optional[Module] = None,
	diagnostics: Optional[List[Diagnostic]] = None,
) -> Controller:
	"""
	Validate a controller class and interpret its route methods.

	Raises `InvalidControllerError` when the class is unnamed, does not extend
	`Controller`, or does not carry exactly one `@Route` with exactly one
	string-literal argument. Methods that fail interpretation are dropped; each
	failure becomes a warning on the returned controller and, when given, is
	also appended to `diagnostics`.
	"""
	file = module.path if module is not None else None

	def invalid(reason: str) -> InvalidControllerError:
		label = f"'{class_decl.name}'" if class_decl.name else "<anonymous class>"
		return InvalidControllerError(f"invalid controller {label}: {reason}", loc=class_decl.loc, file=file)

	if class_decl.name is None:
		raise invalid("class has no name")
	base = class_decl.extends
	if base is None or base.qualifier is not None or base.name != CONTROLLER_BASE:
		raise invalid(f"class must extend {CONTROLLER_BASE}")
	routes = find_annotations(read_annotations(class_decl.decorators), ROUTE_ANNOTATION)
	if len(routes) != 1:
		raise invalid(f"expected exactly one @{ROUTE_ANNOTATION} annotation, found {len(routes)}")
	route = routes[0]
	if len(route.arguments) != 1 or not route.literal:
		raise invalid(f"@{ROUTE_ANNOTATION} takes exactly one string argument")

	controller = Controller(name=class_decl.name, route=route.arguments[0], declaration=class_decl, module=module)
	methods: List[RouteMethod] = []
	warnings: List[Diagnostic] = []
	for method in class_decl.methods:
		if method.is_constructor:
			continue
		try:
			methods.append(interpret_method(controller, method))
		except InvalidRouteMethodError as err:
			warnings.append(err.to_diagnostic(severity="warning"))
	if diagnostics is not None:
		diagnostics.extend(warnings)
	return replace(controller, methods=tuple(methods), warnings=tuple(warnings))


__all__ = ["Controller", "CONTROLLER_BASE", "ROUTE_ANNOTATION", "interpret_controller", "is_controller_candidate"]
