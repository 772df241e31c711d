# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lightweight source span representation used by diagnostics.

A Span carries optional file/line/column info. Parser locations (`Located`)
and already-built spans are both accepted by `Span.from_loc`.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Path | str | None = None) -> "Span":
		"""
		Construct a Span from a parser location object.

		If `loc` is already a Span it is returned unchanged unless `file` fills
		in a missing file name.
		"""
		file_name = str(file) if file is not None else None
		if loc is None:
			return cls(file=file_name)
		if isinstance(loc, cls):
			if loc.file is None and file_name is not None:
				return cls(file=file_name, line=loc.line, column=loc.column)
			return loc
		return cls(
			file=file_name or getattr(loc, "file", None),
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
		)

	def short(self) -> str:
		"""`file:line:col` with `?` for unknown parts."""
		line = "?" if self.line is None else str(self.line)
		column = "?" if self.column is None else str(self.column)
		return f"{self.file or '<unknown>'}:{line}:{column}"


__all__ = ["Span"]
