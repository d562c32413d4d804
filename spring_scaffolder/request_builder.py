"""Spring Initializr request construction.

Maps a ``ScaffoldParameters`` value to the ``/starter.zip`` URL understood by
Spring Initializr.  Query keys are emitted in a fixed order so identical
parameters always produce byte-identical URLs.
"""

from __future__ import annotations

from urllib.parse import urlencode

from .models import ScaffoldParameters

DEFAULT_INITIALIZR_URL = "https://start.spring.io"
STARTER_PATH = "/starter.zip"


def build_query(params: ScaffoldParameters) -> list[tuple[str, str]]:
    """Return the ordered query pairs for *params*."""
    return [
        ("type", params.archive_type.value),
        ("language", "java"),
        ("platformVersion", params.platform_version),
        ("packaging", params.packaging.value),
        ("javaVersion", params.java_version),
        ("groupId", params.group_id),
        ("artifactId", params.artifact_id),
        ("name", params.artifact_id),
        ("description", params.description),
        ("packageName", params.package_name),
        ("dependencies", params.dependencies),
    ]


def build_initializr_url(
    params: ScaffoldParameters,
    base_url: str = DEFAULT_INITIALIZR_URL,
) -> str:
    """Build the Spring Initializr download URL.

    Examples::

        build_initializr_url(ScaffoldParameters(group_id="com.acme", ...))
        -> "https://start.spring.io/starter.zip?type=gradle-project&language=java&..."
    """
    return f"{base_url.rstrip('/')}{STARTER_PATH}?{urlencode(build_query(params))}"
