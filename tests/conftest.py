"""Shared fixtures."""

import time
from pathlib import Path

import pytest


def make_build(
    home: Path,
    job: str,
    number: int,
    artifacts: list[str] = (),
    timestamp_ms: int | None = None,
    result: str | None = "SUCCESS",
) -> Path:
    """Create a Jenkins-style build directory with archived artifacts."""
    build_dir = home / "jobs" / job / "builds" / str(number)
    build_dir.mkdir(parents=True)

    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    result_xml = f"<result>{result}</result>" if result else ""
    (build_dir / "build.xml").write_text(
        f"<build><number>{number}</number>"
        f"<timestamp>{timestamp_ms}</timestamp>{result_xml}</build>"
    )

    for name in artifacts:
        path = build_dir / "archive" / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(name)
    return build_dir


@pytest.fixture
def jenkins_home(tmp_path):
    """Jenkins home with jobs build-app, deploy-app and docs."""
    home = tmp_path / "jenkins"
    make_build(home, "build-app", 41, ["dist/app.jar"])
    make_build(home, "build-app", 42, ["dist/app.jar", "logs/out.txt"])
    make_build(home, "deploy-app", 1)
    (home / "jobs" / "docs").mkdir(parents=True)
    return home
