# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from tsoaclient.parser.ast import Decorator, Located


@dataclass(frozen=True)
class Annotation:
	"""
	A call-form decorator reduced to its name and arguments.

	String-literal arguments are stored decoded; any other argument keeps its
	source text and clears `literal`.
	"""

	name: str
	arguments: Tuple[str, ...]
	literal: bool = True
	loc: Located | None = None


def read_annotations(decorators: Iterable[Decorator]) -> List[Annotation]:
	"""Annotations of a class, method or parameter in source order; bare `@Foo` decorators are skipped."""
	annotations: List[Annotation] = []
	for decorator in decorators:
		if not decorator.is_call:
			continue
		annotations.append(
			Annotation(
				name=decorator.name,
				arguments=tuple(arg.value if arg.is_string else arg.text for arg in decorator.args),
				literal=all(arg.is_string for arg in decorator.args),
				loc=decorator.loc,
			)
		)
	return annotations


def find_annotations(annotations: Iterable[Annotation], name: str) -> List[Annotation]:
	return [a for a in annotations if a.name == name]


__all__ = ["Annotation", "read_annotations", "find_annotations"]
