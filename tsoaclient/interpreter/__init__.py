# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Route interpreter: annotated controller classes -> `Controller` / `RouteMethod`.

Downstream stages consume only these structured models, never decorator
syntax.
"""

from __future__ import annotations

from .annotations import Annotation, find_annotations, read_annotations
from .controller import CONTROLLER_BASE, ROUTE_ANNOTATION, Controller, interpret_controller, is_controller_candidate
from .route_method import PLACEHOLDER_RE, HttpVerb, RouteMethod, extract_placeholders, interpret_method

__all__ = [
	"Annotation",
	"read_annotations",
	"find_annotations",
	"Controller",
	"CONTROLLER_BASE",
	"ROUTE_ANNOTATION",
	"interpret_controller",
	"is_controller_candidate",
	"HttpVerb",
	"RouteMethod",
	"PLACEHOLDER_RE",
	"extract_placeholders",
	"interpret_method",
]
