# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Error types raised by the generator stages.

Every error is a `ValueError` subclass carrying a best-effort location
(`loc`, a parser `Located` or a `Span`) and optionally the file it refers to,
so the driver can turn it into a `Diagnostic` instead of crashing with a raw
traceback.
"""

from __future__ import annotations

from pathlib import Path

from .diagnostics import Diagnostic
from .span import Span


class GeneratorError(ValueError):
	"""Base class for user-facing generator failures."""

	phase = "generate"

	def __init__(self, message: str, *, loc: object | None = None, file: Path | str | None = None) -> None:
		super().__init__(message)
		self.loc = loc
		self.file = file

	@property
	def span(self) -> Span:
		return Span.from_loc(self.loc, file=self.file)

	def to_diagnostic(self, *, severity: str = "error") -> Diagnostic:
		return Diagnostic(message=str(self), phase=self.phase, severity=severity, span=self.span)


class ModuleLoadError(GeneratorError):
	"""A module could not be located, read or parsed."""

	phase = "load"


class InvalidControllerError(GeneratorError):
	"""A decorated class does not satisfy the controller invariants."""

	phase = "interpret"


class InvalidRouteMethodError(GeneratorError):
	"""A controller method does not satisfy the route method invariants."""

	phase = "interpret"


class AsyncReturnTypeError(InvalidRouteMethodError):
	"""An `async` route method whose return type is not `Promise<T>`."""


class DeclarationNotFoundError(GeneratorError):
	"""A referenced type name has no reachable declaration."""

	phase = "resolve"

	def __init__(self, symbol: str, *, loc: object | None = None, file: Path | str | None = None) -> None:
		super().__init__(f"could not find declaration of '{symbol}'", loc=loc, file=file)
		self.symbol = symbol


class UnsupportedTypeError(GeneratorError):
	"""The resolver met a type shape or binding form it cannot follow."""

	phase = "resolve"


class ConfigError(GeneratorError):
	"""Invalid generator configuration (config file or CLI arguments)."""

	phase = "config"


class ImportConflictError(GeneratorError):
	"""The same name is imported both aliased and bare from one module."""

	phase = "emit"


__all__ = [
	"GeneratorError",
	"ModuleLoadError",
	"InvalidControllerError",
	"InvalidRouteMethodError",
	"AsyncReturnTypeError",
	"DeclarationNotFoundError",
	"UnsupportedTypeError",
	"ImportConflictError",
	"ConfigError",
]
