# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
TypeScript subset parser.

`parse_module` turns controller/model source text into the dataclass AST in
`tsoaclient.parser.ast`. Syntax errors surface as lark `UnexpectedInput`; the
loader converts them into `ModuleLoadError` with a file location.
"""

from __future__ import annotations

from . import ast
from .parser import KEYWORD_TYPES, parse_module, parse_type_expr

__all__ = ["ast", "parse_module", "parse_type_expr", "KEYWORD_TYPES"]
