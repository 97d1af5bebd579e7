"""File sources that turn command-line inputs into files for the engine."""

from .local import LocalFileSource
from .revision import RevisionFileSource

__all__ = ["LocalFileSource", "RevisionFileSource"]
