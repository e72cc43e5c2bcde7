"""Tests for configuration parsing."""

import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from jobartifact.config import (
    JobArtifactConfig,
    StoreConfig,
    get_config_template,
    load_config,
)
from jobartifact.errors import NotFound


class TestConfigTemplate:
    def test_template_is_valid_yaml(self):
        data = yaml.safe_load(get_config_template())
        assert "store" in data
        assert "builds" in data
        assert data["parameters"] == []

    def test_template_loads(self):
        config = JobArtifactConfig(**yaml.safe_load(get_config_template()))
        assert config.store.type == "filesystem"
        assert config.builds.recent_days == 7
        assert config.builds.min_builds == 10


class TestStoreConfig:
    def test_defaults(self):
        store = StoreConfig()
        assert store.type == "filesystem"
        assert store.root == "."

    def test_sqlite_requires_db_path(self):
        with pytest.raises(ValueError, match="db_path"):
            StoreConfig(type="sqlite")

    def test_sqlite(self):
        store = StoreConfig(type="sqlite", db_path="builds.db")
        assert store.db_path == "builds.db"

    def test_unknown_type(self):
        with pytest.raises(ValidationError):
            StoreConfig(type="s3")


class TestParameters:
    @pytest.fixture
    def config(self):
        return JobArtifactConfig(
            parameters=[
                {"owner": "deploy-app", "name": "APP_ARTIFACT", "job_name": "build-app"},
                {"owner": "deploy-docs", "name": "APP_ARTIFACT", "job_name": "docs"},
            ]
        )

    def test_find_parameter(self, config):
        param = config.find_parameter("deploy-docs", "APP_ARTIFACT")
        assert param.job_name == "docs"

    def test_find_parameter_case_insensitive(self, config):
        assert config.find_parameter("deploy-app", "app_artifact").job_name == "build-app"

    def test_find_missing_parameter(self, config):
        with pytest.raises(NotFound):
            config.find_parameter("deploy-app", "OTHER")

    def test_to_definition(self, config):
        definition = config.find_parameter("deploy-app", "APP_ARTIFACT").to_definition()
        assert definition.name == "APP_ARTIFACT"
        assert definition.job_name == "build-app"


class TestLoadConfig:
    def test_load(self):
        content = """
store:
  type: sqlite
  db_path: builds.db
builds:
  recent_days: 3
parameters:
  - owner: deploy-app
    name: APP_ARTIFACT
    job_name: build-app
"""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False) as f:
            f.write(content)
            path = Path(f.name)

        try:
            config = load_config(path)
            assert config.store.type == "sqlite"
            assert config.builds.recent_days == 3
            assert config.builds.min_builds == 10
            assert len(config.parameters) == 1
        finally:
            path.unlink()

    def test_load_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).parameters == []

    def test_load_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- store\n- builds\n")
        with pytest.raises(ValueError, match="must be a mapping"):
            load_config(path)

    def test_negative_window_rejected(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("builds:\n  min_builds: -1\n")
        with pytest.raises(ValidationError):
            load_config(path)
