"""Core type definitions for jobartifact."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

# Absolute path of an archived artifact: <artifact root>/<relative path>
ResolvedArtifactPath = str


class JobRef(BaseModel):
    """A job known to the build store."""

    model_config = ConfigDict(frozen=True)

    name: str


class BuildRef(BaseModel):
    """One numbered execution of a job."""

    model_config = ConfigDict(frozen=True)

    job: JobRef
    number: int = Field(ge=1)
    timestamp: datetime | None = None
    building: bool = False


class ArtifactRef(BaseModel):
    """A file archived by a build, relative to the build's archive root."""

    model_config = ConfigDict(frozen=True)

    build: BuildRef
    relative_path: str = Field(min_length=1)


class StringParameterValue(BaseModel):
    """A string parameter bound at build-trigger time."""

    name: str
    value: str
    description: str = ""

    def build_env_vars(self) -> dict[str, str]:
        """Environment variables contributed to the build."""
        return {self.name: self.value, self.name.upper(): self.value}
