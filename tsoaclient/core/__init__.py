"""
tsoaclient.core: shared diagnostics, spans and error types used across stages.

Modules:
  - span: best-effort source locations
  - diagnostics: Diagnostic records collected by the pipeline
  - errors: GeneratorError hierarchy raised by the loader/interpreter/resolver
"""

__all__ = [
	"span",
	"diagnostics",
	"errors",
]
