"""Spring scaffolder -- Spring Initializr adapter for the Genesis orchestrator.

Downloads a generated Spring Boot project from Spring Initializr, unpacks it
and returns it as an in-memory file model that the orchestrator merges into
its own output.

Quick usage::

    from spring_scaffolder import scaffold

    files = await scaffold(module_config, context)
    files["build.gradle"].content
"""

from spring_scaffolder.config import ScaffolderConfig
from spring_scaffolder.filters import remove_files
from spring_scaffolder.initializr_client import InitializrClient
from spring_scaffolder.materializer import ArchiveMaterializer, FileClassifier
from spring_scaffolder.models import (
    ArchiveError,
    ArchiveType,
    CleanupWarning,
    FileEntry,
    FileKind,
    FileModel,
    FileReadWarning,
    ModuleConfig,
    Packaging,
    RemoteGenerationError,
    RemovalWarning,
    ScaffoldContext,
    ScaffoldError,
    ScaffoldParameters,
    ScaffoldWarning,
    TransferError,
    dump_file_model,
)
from spring_scaffolder.request_builder import build_initializr_url
from spring_scaffolder.scaffolder import SpringScaffolder, derive_parameters, scaffold

__all__ = [
    # Entry points
    "scaffold",
    "SpringScaffolder",
    "derive_parameters",
    "ScaffolderConfig",
    # Pipeline stages
    "build_initializr_url",
    "InitializrClient",
    "ArchiveMaterializer",
    "FileClassifier",
    "remove_files",
    # Models
    "ArchiveType",
    "Packaging",
    "ScaffoldParameters",
    "FileKind",
    "FileEntry",
    "FileModel",
    "dump_file_model",
    "ModuleConfig",
    "ScaffoldContext",
    # Errors and warnings
    "ScaffoldError",
    "RemoteGenerationError",
    "TransferError",
    "ArchiveError",
    "ScaffoldWarning",
    "FileReadWarning",
    "RemovalWarning",
    "CleanupWarning",
]
