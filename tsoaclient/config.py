# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generator configuration.

Settings come from an optional JSON file and from CLI flags; flags win. The
file uses the same keys as `GeneratorConfig`:

  {
    "controller_globs": ["src/controllers/**/*.ts"],
    "output_dir": "client",
    "client": "fetch",                  // optional
    "types_import_path": "./types.gen", // optional
    "services_file": "services.gen.ts", // optional
    "types_file": "types.gen.ts",       // optional
    "copy_templates": true              // optional
  }

Relative paths in a config file are taken relative to the file's directory.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, List

from tsoaclient.core.errors import ConfigError
from tsoaclient.core.span import Span

TEMPLATES_ROOT = Path(__file__).with_name("templates")
DEFAULT_CLIENT = "fetch"


def available_clients() -> List[str]:
	if not TEMPLATES_ROOT.is_dir():
		return []
	return sorted(p.name for p in TEMPLATES_ROOT.iterdir() if p.is_dir())


@dataclass(frozen=True)
class GeneratorConfig:
	controller_globs: List[str] = field(default_factory=list)
	output_dir: Path = Path(".")
	client: str = DEFAULT_CLIENT
	types_import_path: str = "./types.gen"
	services_file: str = "services.gen.ts"
	types_file: str = "types.gen.ts"
	copy_templates: bool = True

	def validate(self) -> "GeneratorConfig":
		if not self.controller_globs:
			raise ConfigError("no controller path globs given")
		if self.client not in available_clients():
			known = ", ".join(available_clients()) or "<none>"
			raise ConfigError(f"unknown client '{self.client}' (available: {known})")
		for name in (self.services_file, self.types_file):
			if not name or Path(name).name != name:
				raise ConfigError(f"output file name must be a plain file name, got '{name}'")
		return self

	@property
	def template_dir(self) -> Path:
		return TEMPLATES_ROOT / self.client

	def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
		"""Copy with every override that is not None applied."""
		return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_config_json(path: Path) -> GeneratorConfig:
	try:
		obj = json.loads(path.read_text(encoding="utf-8"))
	except OSError as err:
		raise ConfigError(f"cannot read config file: {err}", file=path) from err
	except json.JSONDecodeError as err:
		raise ConfigError(f"invalid JSON: {err.msg}", loc=Span(line=err.lineno, column=err.colno), file=path) from err
	if not isinstance(obj, dict):
		raise ConfigError("config must be a JSON object", file=path)

	known = {f.name for f in fields(GeneratorConfig)}
	unknown = sorted(set(obj) - known)
	if unknown:
		raise ConfigError(f"unknown config keys: {', '.join(unknown)}", file=path)

	values: Dict[str, Any] = {}
	base = path.parent
	globs = obj.get("controller_globs")
	if globs is not None:
		if isinstance(globs, str):
			globs = [globs]
		if not isinstance(globs, list) or not all(isinstance(g, str) for g in globs):
			raise ConfigError("controller_globs must be a list of strings", file=path)
		values["controller_globs"] = [g if Path(g).is_absolute() else str(base / g) for g in globs]
	output_dir = obj.get("output_dir")
	if output_dir is not None:
		if not isinstance(output_dir, str):
			raise ConfigError("output_dir must be a string", file=path)
		values["output_dir"] = base / output_dir
	for key in ("client", "types_import_path", "services_file", "types_file"):
		value = obj.get(key)
		if value is None:
			continue
		if not isinstance(value, str):
			raise ConfigError(f"{key} must be a string", file=path)
		values[key] = value
	copy_templates = obj.get("copy_templates")
	if copy_templates is not None:
		if not isinstance(copy_templates, bool):
			raise ConfigError("copy_templates must be a boolean", file=path)
		values["copy_templates"] = copy_templates
	return GeneratorConfig(**values)


__all__ = ["GeneratorConfig", "load_config_json", "available_clients", "DEFAULT_CLIENT", "TEMPLATES_ROOT"]
