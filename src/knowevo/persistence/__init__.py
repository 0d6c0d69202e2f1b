"""Persistance des patches, morphisms et motives."""

from knowevo.persistence.file_store import JsonFilePatchStore
from knowevo.persistence.memory_store import InMemoryPatchStore
from knowevo.persistence.store import PatchStore

__all__ = [
    "JsonFilePatchStore",
    "InMemoryPatchStore",
    "PatchStore",
]
