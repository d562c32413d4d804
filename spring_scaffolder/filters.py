"""Post-generation file removal.

Modules list generator output they do not want (for example a sample
``application.properties`` they replace with YAML) under
``generation.files.remove``.  A listed path the generator did not produce is
only a warning, since generator output varies with its parameters.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .models import FileModel, RemovalWarning

_logger = logging.getLogger(__name__)


def normalize_path(path: str) -> str:
    """Bring a user-supplied relative path to the ``FileModel`` key form.

    Examples::

        normalize_path("./src/main/resources/application.properties")
        -> "src/main/resources/application.properties"
        normalize_path("HELP.md") -> "HELP.md"
    """
    normalized = path.strip().replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.lstrip("/")


def remove_files(
    files: FileModel,
    paths_to_remove: Iterable[str] | None,
    logger: logging.Logger | None = None,
) -> FileModel:
    """Delete *paths_to_remove* from *files* in place.

    Returns:
        The same ``files`` mapping, for chaining.
    """
    log = logger or _logger
    paths = list(paths_to_remove or [])
    if not paths:
        return files

    log.info("Removing files as specified in module configuration...")
    for raw_path in paths:
        path = normalize_path(raw_path)
        if files.pop(path, None) is not None:
            log.info("Removed file: %s", path)
        else:
            warning = RemovalWarning(path)
            log.warning(str(warning), extra={"scaffold_warning": warning})

    return files
