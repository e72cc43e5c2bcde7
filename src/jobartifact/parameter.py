"""Artifact build parameter: definition, dropdown population and value binding.

A JobArtifactParameter names a source job. When a build is triggered, the
user picks one of that job's builds and then one of the build's archived
artifacts; the absolute path of the artifact becomes the parameter value.
"""

import logging

from pydantic import BaseModel, ValidationError

from jobartifact.errors import InvalidArgument, NotFound, Unsupported
from jobartifact.resolver import ArtifactPathResolver
from jobartifact.types import StringParameterValue

logger = logging.getLogger(__name__)


class JobArtifactParameter(BaseModel):
    """Parameter definition. The source job is persisted with the definition."""

    name: str
    job_name: str
    description: str = ""

    def create_value(self, form: dict | None = None) -> StringParameterValue:
        """Bind a submitted form ({"name": ..., "value": ...}) to a string value."""
        if form is None:
            logger.warning("Unsupported create_value is being invoked!")
            raise Unsupported("create_value requires submitted form data")
        if not isinstance(form, dict):
            raise InvalidArgument(f"Invalid form for parameter {self.name}: expected a mapping")

        data = {"name": self.name, "description": self.description, **form}
        try:
            return StringParameterValue.model_validate(data)
        except ValidationError as e:
            raise InvalidArgument(f"Invalid value for parameter {self.name}: {e}")


class ArtifactParameterDescriptor:
    """Populates the job, build, artifact and value dropdowns.

    Lookups of a missing job or build yield an empty list; a malformed
    build id raises InvalidArgument.
    """

    display_name = "Artifacts Parameter"

    def __init__(self, resolver: ArtifactPathResolver):
        self.resolver = resolver

    def fill_job_name_items(self, current_job: str) -> list[str]:
        """Jobs to pick from, excluding the job that owns the parameter."""
        return self.resolver.list_other_jobs(current_job)

    def fill_build_id_items(self, job_name: str) -> list[str]:
        try:
            return [str(n) for n in self.resolver.list_builds_of(job_name)]
        except NotFound as e:
            logger.warning(f"No builds to list: {e}")
            return []

    def fill_artifact_items(self, job_name: str, build_id: str) -> list[str]:
        if not build_id:
            return []
        try:
            return self.resolver.list_artifacts_of(job_name, build_id)
        except NotFound as e:
            logger.warning(f"No artifacts to list: {e}")
            return []

    def fill_value_items(self, job_name: str, build_id: str, artifact: str) -> list[str]:
        try:
            return self.resolver.resolve(job_name, build_id, artifact)
        except NotFound as e:
            logger.warning(f"Could not resolve artifact {artifact}: {e}")
            return []
