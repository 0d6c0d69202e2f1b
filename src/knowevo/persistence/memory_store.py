"""Store en mémoire, protégé par un verrou (un patch est écrit en une fois)."""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from knowevo.common.errors import PatchNotFoundError
from knowevo.models.morphism import Morphism
from knowevo.models.motive import Motive
from knowevo.models.patch import Patch
from knowevo.persistence.store import PatchStore


class InMemoryPatchStore(PatchStore):

    def __init__(self):
        self._lock = threading.Lock()
        self._patches: Dict[str, Patch] = {}
        self._morphisms: Dict[str, Morphism] = {}
        self._motives: Dict[str, Motive] = {}
        self._motive_patch: Dict[str, Optional[str]] = {}

    def _write_patch(self, patch: Patch) -> None:
        # Les valeurs sont immuables : aucune copie défensive nécessaire
        with self._lock:
            self._patches[patch.id] = patch

    def retrieve_patch(self, patch_id: str) -> Patch:
        with self._lock:
            patch = self._patches.get(patch_id)
        if patch is None:
            raise PatchNotFoundError(patch_id)
        return patch

    def all_patches(self) -> List[Patch]:
        with self._lock:
            return list(self._patches.values())

    def store_morphism(self, morphism: Morphism) -> str:
        with self._lock:
            self._morphisms[morphism.id] = morphism
        return morphism.id

    def all_morphisms(self) -> List[Morphism]:
        with self._lock:
            return list(self._morphisms.values())

    def store_motive(self, motive: Motive, patch_id: Optional[str] = None) -> str:
        with self._lock:
            self._motives[motive.id] = motive
            self._motive_patch[motive.id] = patch_id
        return motive.id

    def all_motives(self) -> List[Motive]:
        with self._lock:
            return list(self._motives.values())

    def motives_for_patch(self, patch_id: str) -> List[Motive]:
        with self._lock:
            return [
                motive for motive_id, motive in self._motives.items()
                if self._motive_patch.get(motive_id) == patch_id
            ]
