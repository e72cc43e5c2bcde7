"""Filesystem build store over a Jenkins-style home directory."""

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path

from jobartifact.errors import NotFound
from jobartifact.types import BuildRef, JobRef

logger = logging.getLogger(__name__)


def _is_job_name(name: str) -> bool:
    """A job name is a single path component under jobs/."""
    return bool(name) and name not in (".", "..") and "/" not in name and "\\" not in name


class FilesystemBuildStore:
    """Reads jobs, builds and artifacts from <root>/jobs/<job>/builds/<n>/archive."""

    def __init__(self, root: Path):
        self.root = root

    @property
    def jobs_dir(self) -> Path:
        return self.root / "jobs"

    def get_job(self, name: str) -> JobRef:
        if not _is_job_name(name) or not self._job_dir(name).is_dir():
            raise NotFound(f"Job not found: {name}")
        return JobRef(name=name)

    def get_build(self, job: JobRef, number: int) -> BuildRef:
        job = self.get_job(job.name)
        build_dir = self._build_dir(job.name, number)
        if number < 1 or not build_dir.is_dir():
            raise NotFound(f"Build not found: {job.name} #{number}")
        return self._load_build(job, number, build_dir)

    def list_jobs(self) -> list[JobRef]:
        if not self.jobs_dir.is_dir():
            return []
        return [
            JobRef(name=d.name)
            for d in sorted(self.jobs_dir.iterdir())
            if d.is_dir()
        ]

    def list_builds(self, job: JobRef) -> list[BuildRef]:
        job = self.get_job(job.name)
        builds_dir = self._job_dir(job.name) / "builds"
        if not builds_dir.is_dir():
            return []

        numbers = [
            int(d.name)
            for d in builds_dir.iterdir()
            if d.is_dir() and d.name.isascii() and d.name.isdigit() and int(d.name) > 0
        ]
        numbers.sort(reverse=True)
        logger.debug(f"Found {len(numbers)} builds for job {job.name}")
        return [
            self._load_build(job, n, self._build_dir(job.name, n)) for n in numbers
        ]

    def list_archived_artifacts(self, build: BuildRef) -> list[str]:
        archive = Path(self.artifact_root_directory(build))
        if not archive.is_dir():
            return []
        return sorted(
            p.relative_to(archive).as_posix()
            for p in archive.rglob("*")
            if p.is_file()
        )

    def artifact_root_directory(self, build: BuildRef) -> str:
        build = self.get_build(build.job, build.number)
        archive = self._build_dir(build.job.name, build.number) / "archive"
        return str(archive.absolute())

    def _job_dir(self, name: str) -> Path:
        return self.jobs_dir / name

    def _build_dir(self, job_name: str, number: int) -> Path:
        return self._job_dir(job_name) / "builds" / str(number)

    def _load_build(self, job: JobRef, number: int, build_dir: Path) -> BuildRef:
        """Read timestamp and completion state from build.xml."""
        timestamp = None
        building = True

        build_xml = build_dir / "build.xml"
        if build_xml.is_file():
            try:
                root = ET.parse(build_xml).getroot()
            except ET.ParseError as e:
                logger.warning(f"Unreadable build.xml for {job.name} #{number}: {e}")
            else:
                building = root.find("result") is None
                ts = root.findtext("timestamp")
                if ts and ts.strip().isascii() and ts.strip().isdigit():
                    timestamp = datetime.fromtimestamp(int(ts.strip()) / 1000)

        if timestamp is None:
            timestamp = datetime.fromtimestamp(build_dir.stat().st_mtime)

        return BuildRef(job=job, number=number, timestamp=timestamp, building=building)
