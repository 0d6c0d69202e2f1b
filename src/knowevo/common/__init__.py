"""Utilitaires transverses : logging fichier et exceptions."""

from knowevo.common.errors import (
    EmbeddingDimensionError,
    InvalidPatchError,
    KnowEvoError,
    PatchNotFoundError,
)
from knowevo.common.logging import LazyFlushingFileHandler, get_logger

__all__ = [
    "KnowEvoError",
    "EmbeddingDimensionError",
    "PatchNotFoundError",
    "InvalidPatchError",
    "LazyFlushingFileHandler",
    "get_logger",
]
