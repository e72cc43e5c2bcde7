"""SQLite implementation of BuildStore."""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from jobartifact.errors import NotFound
from jobartifact.types import BuildRef, JobRef

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS jobs (
    name TEXT PRIMARY KEY,
    created_at TEXT DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS builds (
    job_name TEXT NOT NULL REFERENCES jobs(name),
    number INTEGER NOT NULL CHECK (number >= 1),
    timestamp TEXT,
    building INTEGER NOT NULL DEFAULT 0,
    artifacts_dir TEXT NOT NULL,
    PRIMARY KEY (job_name, number)
);

CREATE TABLE IF NOT EXISTS artifacts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    job_name TEXT NOT NULL,
    build_number INTEGER NOT NULL,
    relative_path TEXT NOT NULL,
    FOREIGN KEY (job_name, build_number) REFERENCES builds(job_name, number)
);

CREATE INDEX IF NOT EXISTS idx_artifacts_build ON artifacts(job_name, build_number);
"""


class SQLiteBuildStore:
    """SQLite-backed catalog of jobs, builds and archived artifacts."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def initialize(self) -> None:
        """Initialize the database schema."""
        self.conn.executescript(SCHEMA)
        self.conn.commit()

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # Host-side writes

    def register_job(self, name: str) -> JobRef:
        try:
            self.conn.execute("INSERT INTO jobs (name) VALUES (?)", (name,))
        except sqlite3.IntegrityError:
            raise ValueError(f"Job already exists: {name}")
        self.conn.commit()
        return JobRef(name=name)

    def record_build(
        self,
        job_name: str,
        number: int,
        artifacts_dir: str,
        timestamp: datetime | None = None,
        building: bool = False,
    ) -> BuildRef:
        """Record a build of an existing job. Returns the new build.

        A relative artifacts_dir is made absolute against the current directory.
        """
        job = self.get_job(job_name)
        build = BuildRef(
            job=job,
            number=number,
            timestamp=timestamp or datetime.now(),
            building=building,
        )
        try:
            self.conn.execute(
                """
                INSERT INTO builds (job_name, number, timestamp, building, artifacts_dir)
                VALUES (?, ?, ?, ?, ?)
                """,
                (
                    job_name,
                    number,
                    build.timestamp.isoformat(),
                    int(building),
                    str(Path(artifacts_dir).absolute()),
                ),
            )
        except sqlite3.IntegrityError:
            raise ValueError(f"Build already exists: {job_name} #{number}")
        self.conn.commit()
        return build

    def finish_build(self, job_name: str, number: int) -> None:
        """Mark a build as no longer in progress."""
        cursor = self.conn.execute(
            "UPDATE builds SET building = 0 WHERE job_name = ? AND number = ?",
            (job_name, number),
        )
        if cursor.rowcount == 0:
            raise NotFound(f"Build not found: {job_name} #{number}")
        self.conn.commit()

    def archive_artifact(self, job_name: str, number: int, relative_path: str) -> None:
        """Record an artifact archived by a build."""
        self.get_build(self.get_job(job_name), number)
        self.conn.execute(
            """
            INSERT INTO artifacts (job_name, build_number, relative_path)
            VALUES (?, ?, ?)
            """,
            (job_name, number, relative_path),
        )
        self.conn.commit()

    # BuildStore protocol

    def get_job(self, name: str) -> JobRef:
        row = self.conn.execute(
            "SELECT name FROM jobs WHERE name = ?", (name,)
        ).fetchone()
        if row is None:
            raise NotFound(f"Job not found: {name}")
        return JobRef(name=row["name"])

    def get_build(self, job: JobRef, number: int) -> BuildRef:
        row = self.conn.execute(
            "SELECT * FROM builds WHERE job_name = ? AND number = ?",
            (job.name, number),
        ).fetchone()
        if row is None:
            raise NotFound(f"Build not found: {job.name} #{number}")
        return self._row_to_build(row)

    def list_jobs(self) -> list[JobRef]:
        rows = self.conn.execute("SELECT name FROM jobs ORDER BY name").fetchall()
        return [JobRef(name=row["name"]) for row in rows]

    def list_builds(self, job: JobRef) -> list[BuildRef]:
        job = self.get_job(job.name)
        rows = self.conn.execute(
            "SELECT * FROM builds WHERE job_name = ? ORDER BY number DESC",
            (job.name,),
        ).fetchall()
        logger.debug(f"Found {len(rows)} builds for job {job.name}")
        return [self._row_to_build(row) for row in rows]

    def list_archived_artifacts(self, build: BuildRef) -> list[str]:
        rows = self.conn.execute(
            """
            SELECT relative_path FROM artifacts
            WHERE job_name = ? AND build_number = ?
            ORDER BY id
            """,
            (build.job.name, build.number),
        ).fetchall()
        return [row["relative_path"] for row in rows]

    def artifact_root_directory(self, build: BuildRef) -> str:
        row = self.conn.execute(
            "SELECT artifacts_dir FROM builds WHERE job_name = ? AND number = ?",
            (build.job.name, build.number),
        ).fetchone()
        if row is None:
            raise NotFound(f"Build not found: {build.job.name} #{build.number}")
        return row["artifacts_dir"]

    def _row_to_build(self, row: sqlite3.Row) -> BuildRef:
        return BuildRef(
            job=JobRef(name=row["job_name"]),
            number=row["number"],
            timestamp=datetime.fromisoformat(row["timestamp"]) if row["timestamp"] else None,
            building=bool(row["building"]),
        )
