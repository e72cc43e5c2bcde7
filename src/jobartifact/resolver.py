"""Resolve (job, build, artifact) selections to absolute artifact paths."""

import logging
from datetime import datetime, timedelta

from jobartifact.errors import InvalidArgument
from jobartifact.store.base import BuildStore
from jobartifact.types import ArtifactRef, BuildRef, ResolvedArtifactPath

logger = logging.getLogger(__name__)

DEFAULT_RECENT_DAYS = 7
DEFAULT_MIN_BUILDS = 10


def parse_build_number(value: int | str | None) -> int | None:
    """Parse a build number. Returns None for empty input.

    Raises InvalidArgument if the value is not a positive integer.
    """
    if value is None or value == "":
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid build number: {value!r}")
    if number < 1:
        raise InvalidArgument(f"Build number must be positive: {value!r}")
    return number


class ArtifactPathResolver:
    """Lists jobs, builds and artifacts of a build store and resolves artifact paths."""

    def __init__(
        self,
        store: BuildStore,
        recent_days: int = DEFAULT_RECENT_DAYS,
        min_builds: int = DEFAULT_MIN_BUILDS,
    ):
        self.store = store
        self.recent_days = recent_days
        self.min_builds = min_builds

    def resolve(
        self, job_name: str, build_number: str, artifact_name: str
    ) -> list[ResolvedArtifactPath]:
        """Resolve an artifact to its absolute path.

        Returns an empty list while no build or artifact has been chosen,
        otherwise a single path. Raises InvalidArgument for a malformed
        build number and NotFound if the job or build does not exist.
        """
        if not build_number or not artifact_name:
            return []

        artifact = ArtifactRef(
            build=self._get_build(job_name, build_number),
            relative_path=artifact_name,
        )
        root = self.store.artifact_root_directory(artifact.build)
        logger.debug(f"Resolved {artifact_name} of {job_name} #{artifact.build.number} under {root}")
        return [root + "/" + artifact.relative_path]

    def list_other_jobs(self, excluding_job_name: str) -> list[str]:
        return [
            job.name
            for job in self.store.list_jobs()
            if job.name != excluding_job_name
        ]

    def list_builds_of(self, job_name: str) -> list[int]:
        """Build numbers of recent completed builds, most recent first.

        The first `min_builds` completed builds are always listed; older
        ones only if they started within the last `recent_days` days.
        """
        job = self.store.get_job(job_name)
        cutoff = datetime.now() - timedelta(days=self.recent_days)

        numbers = []
        for build in (b for b in self.store.list_builds(job) if not b.building):
            if len(numbers) < self.min_builds or self._is_recent(build, cutoff):
                numbers.append(build.number)
            else:
                break
        return numbers

    def list_artifacts_of(self, job_name: str, build_number: int | str) -> list[str]:
        if build_number is None or build_number == "":
            return []
        build = self._get_build(job_name, build_number)
        return self.store.list_archived_artifacts(build)

    def _get_build(self, job_name: str, build_number: int | str) -> BuildRef:
        number = parse_build_number(build_number)
        if number is None:
            raise InvalidArgument("Build number is required")
        job = self.store.get_job(job_name)
        return self.store.get_build(job, number)

    @staticmethod
    def _is_recent(build: BuildRef, cutoff: datetime) -> bool:
        if build.timestamp is None:
            return False
        timestamp = build.timestamp
        if timestamp.tzinfo is not None:
            # cutoff is naive local time
            timestamp = timestamp.astimezone().replace(tzinfo=None)
        return timestamp >= cutoff
