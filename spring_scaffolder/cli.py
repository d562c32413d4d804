"""Command-line entry point for the Spring scaffolder.

Usage::

    python -m spring_scaffolder.cli --domain acme.com --module orders
    python -m spring_scaffolder.cli --domain acme.com --module orders \\
        --build-tool maven --java-version 17 --write-dir ./backend
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any

from .config import ScaffolderConfig
from .models import FileModel, ScaffoldError, dump_file_model
from .scaffolder import SpringScaffolder
from .utils import (
    configure_logging,
    load_structured,
    print_error,
    print_success,
    print_summary_table,
    save_json,
    write_file_model,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="spring-scaffolder",
        description="Generate a Spring Boot project skeleton via Spring Initializr",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  spring-scaffolder --domain acme.com --module orders\n"
            "  spring-scaffolder --domain acme.com --module orders --build-tool maven -o files.json\n"
            "  spring-scaffolder --domain acme.com --module orders --write-dir ./backend\n"
        ),
    )
    parser.add_argument("--domain", required=True, help="Project domain, e.g. acme.com")
    parser.add_argument("--module", required=True, help="Module name, e.g. orders")
    parser.add_argument("--build-tool", choices=["gradle", "maven"], default=None)
    parser.add_argument("--java-version", default=None)
    parser.add_argument("--spring-boot-version", default=None)
    parser.add_argument("--packaging", choices=["jar", "war"], default=None)
    parser.add_argument("--dependencies", default=None, help="Comma-separated dependency ids")
    parser.add_argument(
        "--module-config",
        default=None,
        help="Module meta configuration file (JSON or YAML)",
    )
    parser.add_argument(
        "--remove",
        action="append",
        default=[],
        metavar="PATH",
        help="Relative path to drop from the output (repeatable)",
    )
    parser.add_argument("--config", default=None, help="Scaffolder configuration JSON file")
    parser.add_argument("--output", "-o", default=None, help="Write the file model as JSON here")
    parser.add_argument("--write-dir", default=None, help="Write the generated files here")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def _field_values(args: argparse.Namespace) -> dict[str, Any]:
    mapping = {
        "buildTool": args.build_tool,
        "javaVersion": args.java_version,
        "springBootVersion": args.spring_boot_version,
        "packaging": args.packaging,
        "dependencies": args.dependencies,
    }
    return {key: value for key, value in mapping.items() if value is not None}


def _module_config(args: argparse.Namespace) -> dict[str, Any]:
    module_config = load_structured(args.module_config) if args.module_config else {}
    if args.remove:
        files = module_config.setdefault("generation", {}).setdefault("files", {})
        files["remove"] = [*files.get("remove", []), *args.remove]
    return module_config


async def _run(args: argparse.Namespace) -> FileModel:
    config = ScaffolderConfig.load(Path(args.config)) if args.config else ScaffolderConfig.from_env()
    context = {
        "project": {"domain": args.domain},
        "module": {"name": args.module, "fieldValues": _field_values(args)},
    }
    files = await SpringScaffolder(config).scaffold(_module_config(args), context)

    if args.output:
        await save_json(dump_file_model(files), args.output)
    if args.write_dir:
        await write_file_model(files, args.write_dir)
    return files


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m spring_scaffolder.cli``."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        files = asyncio.run(_run(args))
    except (ScaffoldError, OSError, ValueError) as exc:
        print_error(f"Error: {exc}")
        return 1

    binary = sum(1 for entry in files.values() if entry.is_binary)
    executable = sum(1 for entry in files.values() if entry.executable)
    print_summary_table(
        {
            "Files": str(len(files)),
            "Binary": str(binary),
            "Executable": str(executable),
            "JSON output": args.output or "-",
            "Written to": args.write_dir or "-",
        },
        title="Spring Boot scaffold",
    )
    print_success("Spring Boot project generated successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
