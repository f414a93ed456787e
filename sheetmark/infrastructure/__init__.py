"""Infrastructure layer exports."""

from .files import DuckDBFileRepository, FileRepository, InMemoryFileRepository

__all__ = [
    "DuckDBFileRepository",
    "FileRepository",
    "InMemoryFileRepository",
]
