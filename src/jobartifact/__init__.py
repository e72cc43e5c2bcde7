"""jobartifact - pick an archived artifact of another job as a build parameter."""

__version__ = "0.1.0"
