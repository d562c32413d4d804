"""Unit tests for ScaffolderConfig and related Pydantic models (spring_scaffolder.config).

Tests cover:
- InitializrConfig, ScaffoldDefaults, ClassificationConfig defaults
- Validation of timeouts
- save/load round trip
- from_env
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from spring_scaffolder.config import (
    ClassificationConfig,
    InitializrConfig,
    ScaffoldDefaults,
    ScaffolderConfig,
)

pytestmark = pytest.mark.unit


class TestInitializrConfig:
    def test_defaults(self):
        config = InitializrConfig()
        assert config.url == "https://start.spring.io"
        assert config.timeout == 60.0
        assert config.connect_timeout == 10.0

    def test_zero_timeout_rejected(self):
        with pytest.raises(ValidationError):
            InitializrConfig(timeout=0)


class TestScaffoldDefaults:
    def test_defaults(self):
        defaults = ScaffoldDefaults()
        assert defaults.build == "gradle"
        assert defaults.java_version == "21"
        assert defaults.platform_version == "3.5.3"
        assert defaults.packaging == "jar"
        assert defaults.dependencies == "web,lombok"


class TestClassificationConfig:
    def test_defaults(self):
        config = ClassificationConfig()
        assert ".jar" in config.binary_extensions
        assert ".class" in config.binary_extensions
        assert config.executable_names == ["gradlew", "gradlew.bat"]
        assert config.executable_extensions == [".sh"]

    def test_lists_are_independent(self):
        first = ClassificationConfig()
        first.binary_extensions.append(".bin")
        assert ".bin" not in ClassificationConfig().binary_extensions


class TestScaffolderConfig:
    def test_defaults(self):
        config = ScaffolderConfig()
        assert config.staging_prefix == "genesis3-spring-"
        assert config.staging_root is None

    def test_save_and_load(self, tmp_path: Path):
        config = ScaffolderConfig(
            initializr=InitializrConfig(url="http://initializr.internal:8080", timeout=5),
            defaults=ScaffoldDefaults(java_version="17"),
            staging_root=tmp_path,
        )
        target = config.save(tmp_path / "nested" / "config.json")
        assert target.exists()

        loaded = ScaffolderConfig.load(target)
        assert loaded == config

    def test_from_env_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = ScaffolderConfig.from_env()
        assert config == ScaffolderConfig()

    def test_from_env_overrides(self, tmp_path: Path):
        env = {
            "SPRING_SCAFFOLDER_URL": "http://localhost:9090",
            "SPRING_SCAFFOLDER_TIMEOUT": "15",
            "SPRING_SCAFFOLDER_JAVA_VERSION": "17",
            "SPRING_SCAFFOLDER_BOOT_VERSION": "3.4.7",
            "SPRING_SCAFFOLDER_STAGING_ROOT": str(tmp_path),
        }
        with patch.dict(os.environ, env, clear=True):
            config = ScaffolderConfig.from_env()
        assert config.initializr.url == "http://localhost:9090"
        assert config.initializr.timeout == 15.0
        assert config.defaults.java_version == "17"
        assert config.defaults.platform_version == "3.4.7"
        assert config.staging_root == tmp_path
