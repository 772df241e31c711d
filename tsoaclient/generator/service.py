# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List

from tsoaclient.interpreter.controller import CONTROLLER_BASE, Controller

from .importable import Importable
from .request_method import MethodDeclaration, RequestMethod

SERVICE_SUFFIX = "Service"


@dataclass
class ServiceDeclaration:
	name: str
	methods: List[MethodDeclaration]


def service_name(controller_name: str) -> str:
	"""`UserController` -> `UserService`; names without the suffix just gain `Service`."""
	if controller_name.endswith(CONTROLLER_BASE) and controller_name != CONTROLLER_BASE:
		return controller_name[: -len(CONTROLLER_BASE)] + SERVICE_SUFFIX
	return controller_name + SERVICE_SUFFIX


class Service:
	"""One generated service class per controller, one request method per route."""

	def __init__(self, controller: Controller) -> None:
		self.controller = controller
		self.request_methods = [RequestMethod(route_method) for route_method in controller.methods]

	@property
	def name(self) -> str:
		return service_name(self.controller.name)

	def required_imports(self) -> Iterator[Importable]:
		for request_method in self.request_methods:
			yield from request_method.required_imports

	def get_declaration(self) -> ServiceDeclaration:
		return ServiceDeclaration(
			name=self.name,
			methods=[request_method.get_declaration() for request_method in self.request_methods],
		)


__all__ = ["SERVICE_SUFFIX", "ServiceDeclaration", "Service", "service_name"]
