"""Run a static-analysis engine over local files or Subversion changesets."""

__version__ = "0.1.0"

__all__ = ["__version__"]
