"""BuildStore protocol for job, build and artifact lookups."""

from typing import Protocol

from jobartifact.types import BuildRef, JobRef


class BuildStore(Protocol):
    """Protocol for the host's registry of jobs, builds and artifacts."""

    def get_job(self, name: str) -> JobRef:
        """Get job by name. Raises NotFound if absent."""
        ...

    def get_build(self, job: JobRef, number: int) -> BuildRef:
        """Get build by number. Raises NotFound if absent."""
        ...

    def list_jobs(self) -> list[JobRef]:
        """List all jobs."""
        ...

    def list_builds(self, job: JobRef) -> list[BuildRef]:
        """List builds of a job, most recent first."""
        ...

    def list_archived_artifacts(self, build: BuildRef) -> list[str]:
        """List artifact paths relative to the build's archive root."""
        ...

    def artifact_root_directory(self, build: BuildRef) -> str:
        """Absolute path of the build's archive root."""
        ...
