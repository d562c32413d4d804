"""Shared utility functions for the Spring scaffolder.

Provides the staging-directory lifecycle, identifier sanitising, JSON/YAML
I/O, writing a file model to disk, and Rich-based logging and terminal
output used by the CLI.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import shutil
import stat
import sys
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .models import CleanupWarning, FileModel

console = Console()

_logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Staging directories
# ---------------------------------------------------------------------------


def _remove_tree(path: Path) -> list[str]:
    """Delete *path* recursively, carrying on past entries that cannot go.

    Returns a ``"<entry>: <error>"`` line for every failure.
    """
    failures: list[str] = []

    def _record(func: Any, failed_path: str, exc: Any) -> None:
        if isinstance(exc, tuple):
            exc = exc[1]
        if isinstance(exc, FileNotFoundError):
            return
        failures.append(f"{failed_path}: {exc}")

    if sys.version_info >= (3, 12):
        shutil.rmtree(path, onexc=_record)
    else:
        shutil.rmtree(path, onerror=_record)
    return failures


@contextmanager
def staging_directory(
    prefix: str = "genesis3-spring-",
    root: str | Path | None = None,
    logger: logging.Logger | None = None,
) -> Iterator[Path]:
    """Yield a freshly created, uniquely named temporary directory.

    The directory is removed recursively when the block exits, whether it
    exits normally, by exception, or by task cancellation.  Removal skips
    past entries it cannot delete; the failures are logged together as one
    ``CleanupWarning`` and never replace the block's outcome.
    """
    log = logger or _logger
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=str(root) if root else None))
    try:
        yield path
    finally:
        try:
            failures = _remove_tree(path)
        except OSError as exc:
            failures = [str(exc)]
        if failures:
            warning = CleanupWarning(str(path), "; ".join(failures))
            log.warning(str(warning), extra={"scaffold_warning": warning})


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def strip_non_alphanumeric(value: str) -> str:
    """Drop every character that is not an ASCII letter or digit.

    Examples::

        strip_non_alphanumeric("order-service") -> "orderservice"
        strip_non_alphanumeric("my_app 2") -> "myapp2"
    """
    return re.sub(r"[^a-zA-Z0-9]", "", value)


def reverse_domain(domain: str) -> str:
    """Turn a domain name into a Java group id.

    Examples::

        reverse_domain("acme.com") -> "com.acme"
        reverse_domain("my-shop.co.uk") -> "uk.co.myshop"
    """
    parts = [strip_non_alphanumeric(part) for part in domain.split(".")]
    return ".".join(reversed(parts))


# ---------------------------------------------------------------------------
# JSON / YAML I/O
# ---------------------------------------------------------------------------


def load_structured(path: str | Path) -> dict[str, Any]:
    """Load a JSON or YAML mapping, chosen by file extension.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document cannot be parsed or is not a mapping.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() in {".yaml", ".yml"}:
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {file_path}: {exc}") from exc
    else:
        data = json.loads(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {file_path}")
    return data


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.  The write itself is
    performed in a worker thread to avoid blocking the event loop on large
    file models.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    content = json.dumps(data, indent=2, ensure_ascii=False)
    await asyncio.to_thread(file_path.write_text, content, "utf-8")


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def make_executable(path: Path) -> None:
    """Add the execute bits to *path* for user, group and others."""
    current = path.stat().st_mode
    path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


async def write_file_model(files: FileModel, output_dir: str | Path) -> Path:
    """Write every entry of *files* below *output_dir*.

    Binary entries are decoded back to their original bytes and executable
    entries get their execute bits set.

    Returns:
        The resolved output directory.
    """
    root = Path(output_dir).resolve()

    def _write() -> None:
        for relative, entry in files.items():
            target = (root / relative).resolve()
            if not target.is_relative_to(root):
                raise ValueError(f"Refusing to write outside {root}: {relative}")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(entry.to_bytes())
            if entry.executable:
                make_executable(target)

    await asyncio.to_thread(_write)
    return root


# ---------------------------------------------------------------------------
# Logging / Rich output helpers
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route ``spring_scaffolder`` log records to the Rich console."""
    handler = RichHandler(console=console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("spring_scaffolder")
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    package_logger.propagate = False


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")
