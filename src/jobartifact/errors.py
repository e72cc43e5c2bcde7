"""Error types for jobartifact."""


class JobArtifactError(Exception):
    """Base class for jobartifact errors."""


class InvalidArgument(JobArtifactError, ValueError):
    """Raised when an argument is malformed (e.g. a non-numeric build number)."""


class NotFound(JobArtifactError, LookupError):
    """Raised when a job, build or parameter does not exist."""


class Unsupported(JobArtifactError, NotImplementedError):
    """Raised by operations that are intentionally not implemented."""
