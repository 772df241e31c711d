# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Code emitter: route methods -> service classes, resolved importables ->
import declarations, plus the printer rendering both output modules.
"""

from __future__ import annotations

from .importable import Import, ImportDeclaration, Importable, ResolvedImportable, UnresolvedImportable
from .printer import print_services_module, print_types_module
from .request_method import MethodDeclaration, RequestMethod, RequestOptions, build_url
from .service import Service, ServiceDeclaration, service_name

__all__ = [
	"Import",
	"ImportDeclaration",
	"Importable",
	"ResolvedImportable",
	"UnresolvedImportable",
	"MethodDeclaration",
	"RequestMethod",
	"RequestOptions",
	"build_url",
	"Service",
	"ServiceDeclaration",
	"service_name",
	"print_services_module",
	"print_types_module",
]
