"""Spring scaffolder configuration.

Centralised, typed configuration for the scaffolding pipeline. All settings
use Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class InitializrConfig(BaseModel):
    """Connection settings for the Spring Initializr service."""

    url: str = Field(default="https://start.spring.io")
    timeout: float = Field(default=60.0, ge=1, description="Per-request timeout in seconds")
    connect_timeout: float = Field(default=10.0, ge=1)
    user_agent: str = Field(default="spring-scaffolder")


class ScaffoldDefaults(BaseModel):
    """Values used when neither field values nor the base template set them."""

    build: str = Field(default="gradle", description="'gradle' or 'maven'")
    java_version: str = Field(default="21")
    platform_version: str = Field(default="3.5.3", description="Spring Boot version")
    packaging: str = Field(default="jar")
    dependencies: str = Field(default="web,lombok")


class ClassificationConfig(BaseModel):
    """Name-based rules for classifying extracted files.

    The defaults match what Spring Initializr currently emits.  Matching is
    case-insensitive.
    """

    binary_extensions: list[str] = Field(
        default_factory=lambda: [
            ".jar", ".class", ".png", ".jpg", ".jpeg", ".gif", ".ico",
            ".zip", ".gz", ".tar", ".war", ".ear",
        ]
    )
    executable_names: list[str] = Field(default_factory=lambda: ["gradlew", "gradlew.bat"])
    executable_extensions: list[str] = Field(default_factory=lambda: [".sh"])


class ScaffolderConfig(BaseModel):
    """Global scaffolder configuration.

    Instances are typically created once by the CLI or by the orchestrator
    integration and then passed to ``SpringScaffolder``.
    """

    initializr: InitializrConfig = Field(default_factory=InitializrConfig)
    defaults: ScaffoldDefaults = Field(default_factory=ScaffoldDefaults)
    classification: ClassificationConfig = Field(default_factory=ClassificationConfig)

    staging_prefix: str = Field(default="genesis3-spring-")
    staging_root: Optional[Path] = Field(
        default=None, description="Parent of staging directories; system temp dir when unset"
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffolderConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffolderConfig":
        """Build a ``ScaffolderConfig`` from environment variables.

        Recognised variables (all optional):
            SPRING_SCAFFOLDER_URL, SPRING_SCAFFOLDER_TIMEOUT,
            SPRING_SCAFFOLDER_JAVA_VERSION, SPRING_SCAFFOLDER_BOOT_VERSION,
            SPRING_SCAFFOLDER_STAGING_ROOT.
        """
        initializr_kwargs: dict[str, Any] = {}
        if os.environ.get("SPRING_SCAFFOLDER_URL"):
            initializr_kwargs["url"] = os.environ["SPRING_SCAFFOLDER_URL"]
        if os.environ.get("SPRING_SCAFFOLDER_TIMEOUT"):
            initializr_kwargs["timeout"] = float(os.environ["SPRING_SCAFFOLDER_TIMEOUT"])

        defaults_kwargs: dict[str, Any] = {}
        if os.environ.get("SPRING_SCAFFOLDER_JAVA_VERSION"):
            defaults_kwargs["java_version"] = os.environ["SPRING_SCAFFOLDER_JAVA_VERSION"]
        if os.environ.get("SPRING_SCAFFOLDER_BOOT_VERSION"):
            defaults_kwargs["platform_version"] = os.environ["SPRING_SCAFFOLDER_BOOT_VERSION"]

        staging_root = os.environ.get("SPRING_SCAFFOLDER_STAGING_ROOT")

        return cls(
            initializr=InitializrConfig(**initializr_kwargs),
            defaults=ScaffoldDefaults(**defaults_kwargs),
            staging_root=Path(staging_root) if staging_root else None,
        )
