"""
Common diagnostic structure for the generator pipeline.

A message plus a severity, an optional phase label and a source span. The
pipeline appends these to a plain list; the CLI decides how to render them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .span import Span


@dataclass
class Diagnostic:
	"""Represents a generator diagnostic (error/warning/note)."""

	message: str
	# Pipeline phase that produced the diagnostic: load, interpret, resolve,
	# emit or config.
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Source location (Span() denotes unknown).
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def format(self) -> str:
		"""Human-readable single line: `file:line:col: severity: message`."""
		return f"{self.span.short()}: {self.severity}: {self.message}"

	def to_json(self) -> dict:
		return {
			"phase": self.phase,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}


def has_errors(diagnostics: list[Diagnostic]) -> bool:
	return any(d.severity == "error" for d in diagnostics)


__all__ = ["Diagnostic", "has_errors"]
