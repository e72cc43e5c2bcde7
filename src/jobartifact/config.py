"""Configuration models for jobartifact."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from jobartifact.errors import NotFound
from jobartifact.parameter import JobArtifactParameter
from jobartifact.resolver import DEFAULT_MIN_BUILDS, DEFAULT_RECENT_DAYS


class StoreConfig(BaseModel):
    """Configuration for the build store."""

    type: Literal["filesystem", "sqlite"] = "filesystem"
    root: str = "."  # Jenkins home for the filesystem store
    db_path: str | None = None

    def model_post_init(self, __context):
        if self.type == "sqlite" and not self.db_path:
            raise ValueError("store.db_path is required when type is 'sqlite'")


class BuildsConfig(BaseModel):
    """Which builds are offered for selection."""

    recent_days: int = Field(DEFAULT_RECENT_DAYS, ge=0)
    min_builds: int = Field(DEFAULT_MIN_BUILDS, ge=0)


class ParameterConfig(BaseModel):
    """An artifact parameter defined on a job."""

    owner: str  # Job that defines the parameter
    name: str
    job_name: str  # Job whose artifacts are offered
    description: str = ""

    def to_definition(self) -> JobArtifactParameter:
        return JobArtifactParameter(
            name=self.name,
            job_name=self.job_name,
            description=self.description,
        )


class JobArtifactConfig(BaseModel):
    """Main jobartifact configuration."""

    store: StoreConfig = StoreConfig()
    builds: BuildsConfig = BuildsConfig()
    parameters: list[ParameterConfig] = []

    def find_parameter(self, owner: str, name: str) -> ParameterConfig:
        """Find a parameter of a job by name (case-insensitive)."""
        for param in self.parameters:
            if param.owner == owner and param.name.lower() == name.lower():
                return param
        raise NotFound(f"No artifact parameter {name} defined on job {owner}")


def load_config(path: Path) -> JobArtifactConfig:
    """Load configuration from YAML file."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
    return JobArtifactConfig(**data)


def get_config_template() -> str:
    """Get the default configuration template."""
    return """# jobartifact configuration

store:
  type: filesystem  # 'filesystem' (Jenkins home layout) or 'sqlite'
  root: /var/lib/jenkins  # Contains jobs/<job>/builds/<n>/archive
  # db_path: jobartifact.db  # Required if type: sqlite

# Completed builds offered for selection: always the newest min_builds,
# plus any older ones started within recent_days.
builds:
  recent_days: 7
  min_builds: 10

# Artifact parameters, one entry per job parameter.
# The resolved artifact path is injected under the parameter name.
parameters: []
  # - owner: deploy-app  # Job that defines the parameter
  #   name: APP_ARTIFACT
  #   job_name: build-app  # Job whose artifacts are offered
  #   description: Artifact to deploy
"""
