"""Spring Boot scaffolding entry point for the Genesis orchestrator.

Derives Spring Initializr parameters from the orchestrator's project and
module metadata, downloads the generated ``starter.zip`` into a private
staging directory, reads it into a ``FileModel`` and drops the files the
module configuration asks to remove.  The staging directory never outlives
the call.

Quick usage::

    from spring_scaffolder import scaffold

    files = await scaffold(
        {"generation": {"files": {"remove": ["HELP.md"]}}},
        {"project": {"domain": "acme.com"},
         "module": {"name": "orders", "fieldValues": {"buildTool": "maven"}}},
    )
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import ScaffolderConfig
from .filters import remove_files
from .initializr_client import InitializrClient
from .materializer import ArchiveMaterializer, FileClassifier
from .models import (
    ArchiveType,
    FileModel,
    ModuleConfig,
    Packaging,
    ScaffoldContext,
    ScaffoldParameters,
)
from .request_builder import build_initializr_url
from .utils import reverse_domain, staging_directory, strip_non_alphanumeric

_logger = logging.getLogger(__name__)

ARCHIVE_NAME = "starter.zip"
EXTRACT_DIR = "extracted"


# ---------------------------------------------------------------------------
# Parameter derivation
# ---------------------------------------------------------------------------


def _first_set(*values: Any) -> Any:
    """Return the first value that is neither ``None`` nor empty."""
    for value in values:
        if value not in (None, "", [], ()):
            return value
    return None


def _join_dependencies(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(str(item).strip() for item in value if str(item).strip())
    return str(value)


def derive_parameters(
    module_config: ModuleConfig,
    context: ScaffoldContext,
    config: ScaffolderConfig | None = None,
) -> ScaffoldParameters:
    """Map orchestrator metadata onto ``ScaffoldParameters``.

    Module field values win over the module's base-template config, which
    wins over ``config.defaults``.
    """
    defaults = (config or ScaffolderConfig()).defaults
    fields = context.module.field_values
    template = module_config.template_config
    module_name = context.module.name

    group_id = reverse_domain(context.project.domain)
    build_tool = _first_set(fields.get("buildTool"), template.get("build"), defaults.build)

    return ScaffoldParameters(
        group_id=group_id,
        artifact_id=f"{module_name}-api",
        package_name=f"{group_id}.{strip_non_alphanumeric(module_name)}",
        archive_type=ArchiveType.MAVEN if build_tool == "maven" else ArchiveType.GRADLE,
        java_version=str(
            _first_set(fields.get("javaVersion"), template.get("javaVersion"), defaults.java_version)
        ),
        platform_version=str(
            _first_set(
                fields.get("springBootVersion"),
                template.get("platformVersion"),
                defaults.platform_version,
            )
        ),
        packaging=Packaging(
            _first_set(fields.get("packaging"), template.get("packaging"), defaults.packaging)
        ),
        dependencies=_join_dependencies(
            _first_set(fields.get("dependencies"), template.get("dependencies"), defaults.dependencies)
        ),
        description=f"Spring Boot project for {module_name}",
    )


# ---------------------------------------------------------------------------
# SpringScaffolder
# ---------------------------------------------------------------------------


class SpringScaffolder:
    """Runs the download -> extract -> filter pipeline for one module.

    Attributes:
        config: Scaffolder configuration.
        client: Archive fetcher.
        materializer: Archive-to-``FileModel`` converter.
        logger: Destination for progress records and warnings.
    """

    def __init__(
        self,
        config: ScaffolderConfig | None = None,
        client: InitializrClient | None = None,
        materializer: ArchiveMaterializer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config or ScaffolderConfig()
        self.logger = logger or _logger
        self.client = client or InitializrClient(
            timeout=self.config.initializr.timeout,
            connect_timeout=self.config.initializr.connect_timeout,
            user_agent=self.config.initializr.user_agent,
            logger=logger,
        )
        self.materializer = materializer or ArchiveMaterializer(
            FileClassifier(self.config.classification),
            logger=logger,
        )

    async def scaffold(
        self,
        module_config: ModuleConfig | Mapping[str, Any],
        context: ScaffoldContext | Mapping[str, Any],
    ) -> FileModel:
        """Generate the module's Spring Boot project as a ``FileModel``.

        Args:
            module_config: The module's meta configuration (model or dict).
            context: Project and module information (model or dict).

        Returns:
            Every file of the generated project, minus removed and unreadable
            entries.

        Raises:
            RemoteGenerationError: Spring Initializr rejected the request.
            TransferError: The archive download failed.
            ArchiveError: The payload was not a valid zip archive.
        """
        if not isinstance(module_config, ModuleConfig):
            module_config = ModuleConfig.model_validate(module_config)
        if not isinstance(context, ScaffoldContext):
            context = ScaffoldContext.model_validate(context)

        params = derive_parameters(module_config, context, self.config)
        url = build_initializr_url(params, self.config.initializr.url)

        self.logger.info(
            "Spring Boot parameters: groupId=%s artifactId=%s packageName=%s type=%s "
            "javaVersion=%s platformVersion=%s packaging=%s",
            params.group_id,
            params.artifact_id,
            params.package_name,
            params.archive_type.value,
            params.java_version,
            params.platform_version,
            params.packaging.value,
        )

        with staging_directory(
            prefix=self.config.staging_prefix,
            root=self.config.staging_root,
            logger=self.logger,
        ) as staging:
            archive = await self.client.download(url, staging / ARCHIVE_NAME)
            files = await self.materializer.materialize(archive, staging / EXTRACT_DIR)
            remove_files(files, module_config.files_to_remove, logger=self.logger)

        self.logger.info("Spring Boot project generated successfully (%d files)", len(files))
        return files


async def scaffold(
    module_config: ModuleConfig | Mapping[str, Any],
    context: ScaffoldContext | Mapping[str, Any],
    *,
    config: ScaffolderConfig | None = None,
    logger: logging.Logger | None = None,
) -> FileModel:
    """Orchestrator hook: build a Spring Boot module's file model."""
    return await SpringScaffolder(config=config, logger=logger).scaffold(module_config, context)
