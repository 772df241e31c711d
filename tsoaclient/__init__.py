# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
tsoaclient: generates a typed HTTP client from annotated TypeScript controllers.

Pipeline:
  parser: TypeScript subset -> dataclass AST
  loader: path -> cached Module
  interpreter: decorated class -> Controller/RouteMethod
  generator: RouteMethod -> request method, imports, service classes
  type_resolver: referenced type names -> declarations across modules
  clientgen: orchestration and CLI
"""

__all__ = ["parser", "loader", "interpreter", "generator", "type_resolver", "clientgen"]
