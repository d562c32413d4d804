"""Pydantic v2 models and the error taxonomy for the Spring scaffolder.

Defines the request-side value objects (``ScaffoldParameters``), the in-memory
file model handed back to the orchestrator (``FileEntry`` / ``FileModel``),
the inbound orchestrator objects (``ModuleConfig`` / ``ScaffoldContext``), and
the fatal errors and non-fatal warnings raised along the pipeline.
"""

from __future__ import annotations

import base64
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ArchiveType(str, Enum):
    """Project layout requested from Spring Initializr."""
    GRADLE = "gradle-project"
    MAVEN = "maven-project"


class Packaging(str, Enum):
    """Packaging format of the generated project."""
    JAR = "jar"
    WAR = "war"


class FileKind(str, Enum):
    """How a file's content is carried inside a ``FileEntry``."""
    BINARY = "binary"
    TEXT = "text"


# ---------------------------------------------------------------------------
# Request parameters
# ---------------------------------------------------------------------------

class ScaffoldParameters(BaseModel):
    """Immutable parameter set for one Spring Initializr request."""

    model_config = ConfigDict(frozen=True)

    group_id: str = Field(..., description="Maven group, e.g. 'com.acme'")
    artifact_id: str = Field(..., description="Artifact id, also used as project name")
    package_name: str = Field(..., description="Root Java package")
    archive_type: ArchiveType = Field(default=ArchiveType.GRADLE)
    java_version: str = Field(default="21")
    platform_version: str = Field(default="3.5.3", description="Spring Boot version")
    packaging: Packaging = Field(default=Packaging.JAR)
    dependencies: str = Field(default="web,lombok", description="Comma-joined dependency ids")
    description: str = Field(default="Spring Boot project")


# ---------------------------------------------------------------------------
# File model
# ---------------------------------------------------------------------------

class FileEntry(BaseModel):
    """A single file of the generated project.

    ``content`` holds UTF-8 text for ``FileKind.TEXT`` entries and base64 text
    for ``FileKind.BINARY`` entries.  Serialised with ``by_alias=True`` the
    kind is emitted under the ``type`` key, which is what the orchestrator
    expects.
    """

    model_config = ConfigDict(populate_by_name=True)

    kind: FileKind = Field(..., alias="type")
    content: str = Field(default="")
    executable: bool = Field(default=False)

    @classmethod
    def from_bytes(cls, data: bytes, kind: FileKind, executable: bool = False) -> "FileEntry":
        """Build an entry from raw file bytes.

        Raises:
            UnicodeDecodeError: If a text entry is not valid UTF-8.
        """
        if kind is FileKind.BINARY:
            content = base64.b64encode(data).decode("ascii")
        else:
            content = data.decode("utf-8")
        return cls(kind=kind, content=content, executable=executable)

    @property
    def is_binary(self) -> bool:
        return self.kind is FileKind.BINARY

    def to_bytes(self) -> bytes:
        """Return the exact bytes this entry was built from."""
        if self.is_binary:
            return base64.b64decode(self.content)
        return self.content.encode("utf-8")


FileModel = dict[str, FileEntry]


def dump_file_model(model: FileModel) -> dict[str, dict[str, Any]]:
    """Return the JSON-ready ``{path: {"type", "content", "executable"}}`` mapping."""
    return {
        path: entry.model_dump(mode="json", by_alias=True)
        for path, entry in model.items()
    }


# ---------------------------------------------------------------------------
# Inbound orchestrator objects
# ---------------------------------------------------------------------------

# Orchestrator payloads may carry an explicit null for any optional section;
# it means the same as leaving the key out.

def _null_as_empty_dict(value: Any) -> Any:
    return {} if value is None else value


def _null_as_empty_list(value: Any) -> Any:
    return [] if value is None else value


class BaseTemplate(BaseModel):
    """``generation.baseTemplate`` section of a module's meta configuration."""
    config: dict[str, Any] = Field(default_factory=dict)

    config_null = field_validator("config", mode="before")(_null_as_empty_dict)


class FilesConfig(BaseModel):
    """``generation.files`` section: post-generation file operations."""
    remove: list[str] = Field(default_factory=list)

    remove_null = field_validator("remove", mode="before")(_null_as_empty_list)


class GenerationConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    base_template: BaseTemplate = Field(default_factory=BaseTemplate, alias="baseTemplate")
    files: FilesConfig = Field(default_factory=FilesConfig)

    sections_null = field_validator("base_template", "files", mode="before")(_null_as_empty_dict)


class ModuleConfig(BaseModel):
    """The subset of a module's ``meta.json`` the scaffolder reads."""

    model_config = ConfigDict(extra="allow")

    generation: GenerationConfig = Field(default_factory=GenerationConfig)

    generation_null = field_validator("generation", mode="before")(_null_as_empty_dict)

    @property
    def template_config(self) -> dict[str, Any]:
        return self.generation.base_template.config

    @property
    def files_to_remove(self) -> list[str]:
        return self.generation.files.remove


class ProjectInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    domain: str = Field(..., description="Project domain, e.g. 'acme.com'")


class ModuleInstance(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Module instance name, e.g. 'orders'")
    field_values: dict[str, Any] = Field(default_factory=dict, alias="fieldValues")

    field_values_null = field_validator("field_values", mode="before")(_null_as_empty_dict)


class ScaffoldContext(BaseModel):
    """Project and module information supplied by the orchestrator."""

    model_config = ConfigDict(extra="allow")

    project: ProjectInfo
    module: ModuleInstance


# ---------------------------------------------------------------------------
# Fatal errors
# ---------------------------------------------------------------------------

class ScaffoldError(Exception):
    """Base class for errors that abort a scaffolding run."""


class RemoteGenerationError(ScaffoldError):
    """Spring Initializr answered with a non-success status."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Spring Initializr request failed with status: {status_code}")


class TransferError(ScaffoldError):
    """The archive could not be transferred to the staging directory."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to download Spring Boot project: {reason}")


class ArchiveError(ScaffoldError):
    """The downloaded payload is not a readable zip archive."""

    def __init__(self, archive_path: str, reason: str) -> None:
        self.archive_path = archive_path
        self.reason = reason
        super().__init__(f"Invalid Spring Boot archive {archive_path}: {reason}")


# ---------------------------------------------------------------------------
# Non-fatal warnings
# ---------------------------------------------------------------------------

class ScaffoldWarning(UserWarning):
    """Base class for conditions that are logged but do not stop the run."""


class FileReadWarning(ScaffoldWarning):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read file {path}: {reason}")


class RemovalWarning(ScaffoldWarning):
    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found for removal: {path}")


class CleanupWarning(ScaffoldWarning):
    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Could not clean up temporary directory {path}: {reason}")
