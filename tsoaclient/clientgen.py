# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Client generation pipeline and CLI.

load controller modules -> interpret controllers -> build services -> resolve
referenced types -> print services/types modules -> write files (+ runtime
templates).
"""

from __future__ import annotations

import argparse
import json
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from tsoaclient.config import GeneratorConfig, available_clients, load_config_json
from tsoaclient.core.diagnostics import Diagnostic, has_errors
from tsoaclient.core.errors import GeneratorError, InvalidControllerError
from tsoaclient.core.span import Span
from tsoaclient.generator import (
	Import,
	ImportDeclaration,
	ResolvedImportable,
	Service,
	ServiceDeclaration,
	print_services_module,
	print_types_module,
)
from tsoaclient.interpreter import Controller, interpret_controller, is_controller_candidate
from tsoaclient.loader import ModuleLoader
from tsoaclient.parser.ast import TypeDecl
from tsoaclient.type_resolver import TypeResolver


@dataclass
class GeneratedClient:
	"""Everything one run produced, before anything is written to disk."""

	controllers: List[Controller] = field(default_factory=list)
	services: List[ServiceDeclaration] = field(default_factory=list)
	imports: List[ImportDeclaration] = field(default_factory=list)
	declarations: List[TypeDecl] = field(default_factory=list)
	services_source: str = ""
	types_source: str = ""


def generate_client(
	config: GeneratorConfig,
	*,
	loader: Optional[ModuleLoader] = None,
	diagnostics: Optional[List[Diagnostic]] = None,
) -> GeneratedClient:
	"""
	Run the pipeline in memory.

	Invalid controllers become error diagnostics and are skipped; invalid route
	methods become warnings. Load, resolution and import failures propagate as
	`GeneratorError`.
	"""
	loader = loader or ModuleLoader()
	diagnostics = diagnostics if diagnostics is not None else []
	resolver = TypeResolver(loader, config.types_import_path, diagnostics=diagnostics)
	result = GeneratedClient()
	resolved: List[ResolvedImportable] = []

	paths = loader.expand_globs(config.controller_globs)
	if not paths:
		patterns = ", ".join(config.controller_globs)
		diagnostics.append(Diagnostic(message=f"no controller modules match {patterns}", phase="load", severity="warning"))

	for path in paths:
		module = loader.load(path)
		for class_decl in module.classes:
			if not is_controller_candidate(class_decl):
				continue
			try:
				controller = interpret_controller(class_decl, module=module, diagnostics=diagnostics)
			except InvalidControllerError as err:
				diagnostics.append(err.to_diagnostic())
				continue
			result.controllers.append(controller)
			service = Service(controller)
			result.services.append(service.get_declaration())
			for importable in service.required_imports():
				if isinstance(importable, ResolvedImportable):
					resolved.append(importable)
				else:
					resolved.extend(resolver.resolve(module, importable))

	result.imports = Import(resolved).get_declarations()
	result.declarations = resolver.export_snapshot()
	result.services_source = print_services_module(result.imports, result.services)
	result.types_source = print_types_module(result.declarations)
	return result


def write_client(config: GeneratorConfig, client: GeneratedClient) -> List[Path]:
	"""Write both generated modules (and the runtime templates) into `config.output_dir`."""
	out_dir = Path(config.output_dir)
	out_dir.mkdir(parents=True, exist_ok=True)
	written: List[Path] = []
	if config.copy_templates:
		template_dir = config.template_dir
		for entry in sorted(template_dir.iterdir()):
			target = out_dir / entry.name
			if entry.is_dir():
				shutil.copytree(entry, target, dirs_exist_ok=True)
				written.extend(sorted(p for p in target.rglob("*") if p.is_file()))
			else:
				shutil.copy2(entry, target)
				written.append(target)
	services_path = out_dir / config.services_file
	services_path.write_text(client.services_source, encoding="utf-8")
	written.append(services_path)
	types_path = out_dir / config.types_file
	types_path.write_text(client.types_source, encoding="utf-8")
	written.append(types_path)
	return written


def _report(diagnostics: List[Diagnostic], exit_code: int, *, as_json: bool, verbose: bool) -> None:
	shown = [d for d in diagnostics if verbose or d.severity != "note"]
	if as_json:
		payload = {
			"exit_code": exit_code,
			"diagnostics": [d.to_json() for d in shown],
		}
		print(json.dumps(payload))
		return
	for d in shown:
		print(d.format(), file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
	"""
	CLI entry point: `tsoa-client -g 'src/**/*Controller.ts' -o client`.

	With --json, prints structured diagnostics and an exit_code on stdout;
	otherwise prints `file:line:col: severity: message` lines to stderr.
	"""
	parser = argparse.ArgumentParser(prog="tsoa-client", description="Generate a TypeScript client from tsoa controllers")
	parser.add_argument(
		"-g",
		"--controller-path-globs",
		dest="controller_globs",
		nargs="+",
		help="Glob patterns for finding tsoa controller classes",
	)
	parser.add_argument(
		"-o",
		"--output-client-directory",
		dest="output_dir",
		type=Path,
		help="Directory the client is generated in",
	)
	parser.add_argument(
		"-c",
		"--client",
		default=None,
		help=f"Client flavor whose runtime templates are copied (available: {', '.join(available_clients())})",
	)
	parser.add_argument("--config", type=Path, help="JSON config file; command-line flags override its values")
	parser.add_argument("--types-import-path", default=None, help="Import path of the types module (default: ./types.gen)")
	parser.add_argument("--no-templates", action="store_true", help="Do not copy the runtime templates")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics as JSON (phase/message/severity/file/line/column)",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Also report resolved types and written files")
	args = parser.parse_args(argv)

	if args.config is None:
		missing = []
		if not args.controller_globs:
			missing.append("-g/--controller-path-globs")
		if args.output_dir is None:
			missing.append("-o/--output-client-directory")
		if missing:
			parser.error(f"the following arguments are required: {', '.join(missing)}")

	diagnostics: List[Diagnostic] = []
	try:
		config = load_config_json(args.config) if args.config is not None else GeneratorConfig()
		config = config.with_overrides(
			controller_globs=args.controller_globs,
			output_dir=args.output_dir,
			client=args.client,
			types_import_path=args.types_import_path,
			copy_templates=False if args.no_templates else None,
		).validate()
		client = generate_client(config, diagnostics=diagnostics)
		if not has_errors(diagnostics):
			for path in write_client(config, client):
				diagnostics.append(Diagnostic(message=f"wrote {path}", phase="write", severity="note"))
	except GeneratorError as err:
		diagnostics.append(err.to_diagnostic())
	except OSError as err:
		span = Span(file=str(err.filename) if err.filename else None)
		diagnostics.append(Diagnostic(message=str(err), phase="write", severity="error", span=span))

	exit_code = 1 if has_errors(diagnostics) else 0
	_report(diagnostics, exit_code, as_json=args.json, verbose=args.verbose)
	return exit_code


if __name__ == "__main__":
	sys.exit(main())
