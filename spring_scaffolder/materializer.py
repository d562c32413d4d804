"""Archive extraction and in-memory file model construction.

Unpacks a downloaded ``starter.zip`` into a staging directory, then walks the
extracted tree and reads every file into a ``FileModel``.  Binary artefacts
are carried as base64 text, everything else as UTF-8 text, and launcher
scripts are tagged executable.  A file that cannot be read is logged and left
out; the walk continues.
"""

from __future__ import annotations

import asyncio
import logging
import zipfile
from pathlib import Path

from .config import ClassificationConfig
from .models import ArchiveError, FileEntry, FileKind, FileModel, FileReadWarning

_logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class FileClassifier:
    """Classifies files as binary/text and executable from their bare name."""

    def __init__(self, config: ClassificationConfig | None = None) -> None:
        config = config or ClassificationConfig()
        self.binary_extensions = tuple(ext.lower() for ext in config.binary_extensions)
        self.executable_names = frozenset(name.lower() for name in config.executable_names)
        self.executable_extensions = tuple(ext.lower() for ext in config.executable_extensions)

    def kind(self, name: str) -> FileKind:
        if name.lower().endswith(self.binary_extensions):
            return FileKind.BINARY
        return FileKind.TEXT

    def is_executable(self, name: str) -> bool:
        lowered = name.lower()
        return lowered in self.executable_names or lowered.endswith(self.executable_extensions)


# ---------------------------------------------------------------------------
# Blocking helpers (run in worker threads)
# ---------------------------------------------------------------------------


def _extract_all(archive_path: Path, target_dir: Path) -> None:
    try:
        with zipfile.ZipFile(archive_path) as archive:
            archive.extractall(target_dir)
    except (zipfile.BadZipFile, zipfile.LargeZipFile) as exc:
        raise ArchiveError(str(archive_path), str(exc)) from exc
    except FileNotFoundError as exc:
        raise ArchiveError(str(archive_path), "archive not found") from exc
    except OSError as exc:
        raise ArchiveError(str(archive_path), f"extraction failed: {exc}") from exc


def _walk_files(root: Path) -> list[Path]:
    """Return every regular file below *root*, depth-first in name order."""
    files: list[Path] = []
    for item in sorted(root.iterdir(), key=lambda p: p.name):
        if item.is_dir():
            files.extend(_walk_files(item))
        elif item.is_file():
            files.append(item)
    return files


def _read_file_bytes(path: Path) -> bytes:
    return path.read_bytes()


# ---------------------------------------------------------------------------
# ArchiveMaterializer
# ---------------------------------------------------------------------------


class ArchiveMaterializer:
    """Turns a Spring Initializr zip into a ``FileModel``."""

    def __init__(
        self,
        classifier: FileClassifier | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.classifier = classifier or FileClassifier()
        self.logger = logger or _logger

    async def materialize(self, archive_path: str | Path, staging_dir: str | Path) -> FileModel:
        """Extract *archive_path* into *staging_dir* and read it back into memory.

        Args:
            archive_path: The downloaded zip file.
            staging_dir: Directory to extract into; created if missing.

        Returns:
            A ``FileModel`` keyed by forward-slash paths relative to
            *staging_dir*.

        Raises:
            ArchiveError: The archive is missing or not a valid zip file.
        """
        archive = Path(archive_path)
        root = Path(staging_dir)

        self.logger.info("Extracting Spring Boot project...")
        await asyncio.to_thread(root.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(_extract_all, archive, root)

        files: FileModel = {}
        for path in await asyncio.to_thread(_walk_files, root):
            relative = path.relative_to(root).as_posix()
            entry = await self._read_entry(path, relative)
            if entry is not None:
                files[relative] = entry

        self.logger.info("Extracted %d files from Spring Boot project", len(files))
        return files

    async def _read_entry(self, path: Path, relative: str) -> FileEntry | None:
        kind = self.classifier.kind(path.name)
        executable = self.classifier.is_executable(path.name)
        try:
            data = await asyncio.to_thread(_read_file_bytes, path)
            return FileEntry.from_bytes(data, kind=kind, executable=executable)
        except (OSError, UnicodeDecodeError) as exc:
            warning = FileReadWarning(relative, str(exc))
            self.logger.warning(str(warning), extra={"scaffold_warning": warning})
            return None
