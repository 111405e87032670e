"""Unit tests for Config (launchts.config).

Tests cover:
- Config defaults and validation
- from_env with and without variables
- version_resolver with the bundled and a custom reference manifest
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from launchts.config import Config


class TestConfigDefaults:
    @pytest.mark.unit
    def test_defaults(self):
        config = Config()
        assert config.output_dir == Path(".")
        assert config.reference_manifest is None
        assert config.fallback_version == "latest"
        assert config.command_timeout == 600

    @pytest.mark.unit
    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(command_timeout=0)

    @pytest.mark.unit
    def test_fallback_version_not_empty(self):
        with pytest.raises(ValidationError):
            Config(fallback_version="")


class TestConfigFromEnv:
    @pytest.mark.unit
    def test_from_env_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = Config.from_env()
        assert config == Config()

    @pytest.mark.unit
    def test_from_env_reads_variables(self, tmp_path: Path):
        env = {
            "LAUNCHTS_OUTPUT_DIR": str(tmp_path),
            "LAUNCHTS_REFERENCE_MANIFEST": str(tmp_path / "package.json"),
            "LAUNCHTS_FALLBACK_VERSION": "*",
            "LAUNCHTS_COMMAND_TIMEOUT": "30",
        }
        with patch.dict(os.environ, env, clear=True):
            config = Config.from_env()
        assert config.output_dir == tmp_path
        assert config.reference_manifest == tmp_path / "package.json"
        assert config.fallback_version == "*"
        assert config.command_timeout == 30

    @pytest.mark.unit
    def test_from_env_invalid_timeout(self):
        with patch.dict(os.environ, {"LAUNCHTS_COMMAND_TIMEOUT": "0"}, clear=True):
            with pytest.raises(ValidationError):
                Config.from_env()


class TestVersionResolver:
    @pytest.mark.unit
    def test_bundled_reference_pins_known_dependencies(self):
        resolver = Config().version_resolver()
        assert resolver.resolve("typescript") != "latest"
        assert resolver.resolve("eslint") != "latest"
        assert resolver.resolve("not-a-real-package") == "latest"

    @pytest.mark.unit
    def test_custom_reference_manifest(self, tmp_path: Path):
        manifest = tmp_path / "package.json"
        manifest.write_text(
            json.dumps(
                {
                    "dependencies": {"typescript": "5.0.0", "prettier": "2.0.0"},
                    "devDependencies": {"typescript": "5.4.0"},
                }
            )
        )
        resolver = Config(reference_manifest=manifest, fallback_version="*").version_resolver()
        assert resolver.resolve("typescript") == "5.4.0"
        assert resolver.resolve("prettier") == "2.0.0"
        assert resolver.resolve("eslint") == "*"

    @pytest.mark.unit
    def test_missing_reference_manifest_raises(self, tmp_path: Path):
        config = Config(reference_manifest=tmp_path / "missing.json")
        with pytest.raises(FileNotFoundError):
            config.version_resolver()
