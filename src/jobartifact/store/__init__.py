"""Build store module for job, build and artifact lookups."""

from jobartifact.store.base import BuildStore
from jobartifact.store.local import FilesystemBuildStore
from jobartifact.store.sqlite import SQLiteBuildStore

__all__ = ["BuildStore", "FilesystemBuildStore", "SQLiteBuildStore"]
