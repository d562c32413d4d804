"""Shared pytest fixtures for the Spring scaffolder test suite.

Provides reusable fixtures for:
- In-memory Gradle and Maven starter archives shaped like Spring Initializr output
- An ``httpx.MockTransport`` that serves those archives by project type
- A ``SpringScaffolder`` wired to the mock transport and a private staging root
- Sample orchestrator module configs and contexts
"""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from spring_scaffolder.config import ScaffolderConfig
from spring_scaffolder.initializr_client import InitializrClient
from spring_scaffolder.scaffolder import SpringScaffolder


# ---------------------------------------------------------------------------
# Starter archive contents
# ---------------------------------------------------------------------------

# Deliberately not valid UTF-8, so a text read would fail.
WRAPPER_JAR_BYTES = b"PK\x03\x04\x14\x00\x08\x08\xff\xfe\x00\x80binary-wrapper\x00\xc3\x28"

BUILD_GRADLE = """\
plugins {
\tid 'java'
\tid 'org.springframework.boot' version '3.5.3'
\tid 'io.spring.dependency-management' version '1.1.7'
}

group = 'com.acme'
version = '0.0.1-SNAPSHOT'
description = 'Spring Boot project for orders'

java {
\ttoolchain {
\t\tlanguageVersion = JavaLanguageVersion.of(21)
\t}
}

dependencies {
\timplementation 'org.springframework.boot:spring-boot-starter-web'
\tcompileOnly 'org.projectlombok:lombok'
}
"""

POM_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
\t<modelVersion>4.0.0</modelVersion>
\t<groupId>com.acme</groupId>
\t<artifactId>orders-api</artifactId>
\t<properties>
\t\t<java.version>17</java.version>
\t</properties>
</project>
"""


def _common_files(package_dir: str) -> dict[str, bytes]:
    return {
        "HELP.md": "# Getting Started with Spring Boot\n".encode("utf-8"),
        ".gitignore": b"build/\ntarget/\n",
        f"src/main/java/{package_dir}/OrdersApiApplication.java": (
            b"package com.acme.orders;\n\npublic class OrdersApiApplication {}\n"
        ),
        "src/main/resources/application.yaml": b"spring:\n  application:\n    name: orders-api\n",
        f"src/test/java/{package_dir}/OrdersApiApplicationTests.java": (
            b"package com.acme.orders;\n\nclass OrdersApiApplicationTests {}\n"
        ),
    }


def gradle_starter_files() -> dict[str, bytes]:
    files = _common_files("com/acme/orders")
    files.update(
        {
            "build.gradle": BUILD_GRADLE.encode("utf-8"),
            "settings.gradle": b"rootProject.name = 'orders-api'\n",
            "gradlew": b"#!/bin/sh\nexec java -jar gradle/wrapper/gradle-wrapper.jar \"$@\"\n",
            "gradlew.bat": b"@rem Gradle startup script for Windows\r\n",
            "gradle/wrapper/gradle-wrapper.jar": WRAPPER_JAR_BYTES,
            "gradle/wrapper/gradle-wrapper.properties": b"distributionUrl=https\\://services.gradle.org/\n",
        }
    )
    return files


def maven_starter_files() -> dict[str, bytes]:
    files = _common_files("com/acme/orders")
    files.update(
        {
            "pom.xml": POM_XML.encode("utf-8"),
            "mvnw": b"#!/bin/sh\n# Maven wrapper\n",
            "mvnw.cmd": b"@REM Maven wrapper for Windows\r\n",
            ".mvn/wrapper/maven-wrapper.properties": b"wrapperVersion=3.3.2\n",
        }
    )
    return files


def make_zip(files: dict[str, bytes]) -> bytes:
    """Pack ``{relative_path: bytes}`` into an in-memory zip archive."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, data in files.items():
            archive.writestr(name, data)
    return buffer.getvalue()


# ---------------------------------------------------------------------------
# Mock Spring Initializr
# ---------------------------------------------------------------------------


class FakeInitializr:
    """Serves canned starter archives and records every request."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.archives = {
            "gradle-project": make_zip(gradle_starter_files()),
            "maven-project": make_zip(maven_starter_files()),
        }

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "Invalid request"})
        project_type = request.url.params.get("type", "gradle-project")
        return httpx.Response(
            200,
            content=self.archives[project_type],
            headers={"Content-Type": "application/zip"},
        )

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def fake_initializr() -> FakeInitializr:
    return FakeInitializr()


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    """Parent directory for staging dirs, so tests can check it is left empty."""
    root = tmp_path / "staging"
    root.mkdir()
    return root


@pytest.fixture
def scaffolder_config(staging_root: Path) -> ScaffolderConfig:
    return ScaffolderConfig(staging_root=staging_root)


@pytest.fixture
def make_scaffolder(
    fake_initializr: FakeInitializr, scaffolder_config: ScaffolderConfig
) -> Callable[..., SpringScaffolder]:
    """Factory for scaffolders that talk to ``fake_initializr``."""

    def _make(**kwargs: Any) -> SpringScaffolder:
        kwargs.setdefault("config", scaffolder_config)
        kwargs.setdefault("client", InitializrClient(transport=fake_initializr.transport))
        return SpringScaffolder(**kwargs)

    return _make


# ---------------------------------------------------------------------------
# Orchestrator inputs
# ---------------------------------------------------------------------------


@pytest.fixture
def module_config() -> dict[str, Any]:
    """A ``code-spring`` meta.json as the orchestrator passes it."""
    return {
        "id": "code-spring",
        "generation": {
            "baseTemplate": {
                "type": "spring-initializr",
                "config": {"build": "gradle", "javaVersion": "21", "packaging": "jar"},
            },
            "files": {"remove": ["HELP.md"]},
        },
    }


@pytest.fixture
def context() -> dict[str, Any]:
    return {
        "project": {"name": "Acme Shop", "domain": "acme.com"},
        "module": {
            "name": "orders",
            "fieldValues": {
                "javaVersion": "21",
                "springBootVersion": "3.5.3",
                "buildTool": "gradle",
                "packaging": "jar",
            },
        },
        "modules": [],
    }
