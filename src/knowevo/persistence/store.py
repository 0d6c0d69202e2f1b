"""
Interface PatchStore - contrat de persistance du moteur.

Le moteur est agnostique de la technologie de stockage tant que l'écriture
d'un patch est atomique : facts, edges et embeddings persistent ou
échouent ensemble.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from knowevo.common.errors import InvalidPatchError
from knowevo.models.fact import Fact
from knowevo.models.morphism import Morphism
from knowevo.models.motive import Motive
from knowevo.models.patch import Patch
from knowevo.models.validation import validate_patch
from knowevo.patches.queries import facts_at_time, revision_chain

logger = logging.getLogger(__name__)


class PatchStore(ABC):
    """Interface abstraite pour la persistance des patches, morphisms et motives"""

    # === Patches ===

    def store_patch(self, patch: Patch, validate: bool = True) -> str:
        """
        Persiste un patch et retourne son id.

        Raises:
            InvalidPatchError: si validate et que le patch viole un invariant
        """
        if validate:
            report = validate_patch(patch)
            if not report.valid:
                logger.warning(
                    f"[EVO:Store] Patch {patch.id} refusé: {len(report.violations)} violations"
                )
                raise InvalidPatchError(patch.id, report)
        self._write_patch(patch)
        logger.debug(
            f"[EVO:Store] Patch {patch.id} stocké ({len(patch.facts)} facts, "
            f"{len(patch.edges)} edges, {len(patch.embeddings)} embeddings)"
        )
        return patch.id

    @abstractmethod
    def _write_patch(self, patch: Patch) -> None:
        """Écriture atomique d'un patch"""
        pass

    @abstractmethod
    def retrieve_patch(self, patch_id: str) -> Patch:
        """Récupérer un patch (PatchNotFoundError si absent)"""
        pass

    @abstractmethod
    def all_patches(self) -> List[Patch]:
        """Tous les patches, dans l'ordre de stockage"""
        pass

    def query_by_source(self, source_id: str) -> List[str]:
        """Ids des patches d'une source, du plus ancien au plus récent"""
        patches = [p for p in self.all_patches() if p.source_id == source_id]
        patches.sort(key=lambda p: p.timestamp)
        return [p.id for p in patches]

    def latest_for_source(self, source_id: str) -> Optional[str]:
        """Id du patch le plus récent d'une source, None si aucun"""
        patches = [p for p in self.all_patches() if p.source_id == source_id]
        if not patches:
            return None
        return max(patches, key=lambda p: p.timestamp).id

    def facts_at_time(self, source_id: str, at: datetime) -> List[Fact]:
        """Facts du dernier patch de la source déjà valides à l'instant `at`"""
        latest_id = self.latest_for_source(source_id)
        if latest_id is None:
            return []
        return facts_at_time(self.retrieve_patch(latest_id), at)

    def revision_history(self, fact_id: str) -> List[Fact]:
        """
        Chaîne de révisions d'un fact sur tous les patches stockés.

        Pour un fact présent dans plusieurs patches, la version du patch le
        plus récent est retenue.
        """
        patches = sorted(self.all_patches(), key=lambda p: p.timestamp, reverse=True)
        return revision_chain((f for p in patches for f in p.facts), fact_id)

    # === Morphisms ===

    @abstractmethod
    def store_morphism(self, morphism: Morphism) -> str:
        """Persister un morphism"""
        pass

    @abstractmethod
    def all_morphisms(self) -> List[Morphism]:
        pass

    def find_morphisms_from(self, patch_id: str) -> List[Morphism]:
        return [m for m in self.all_morphisms() if m.from_patch == patch_id]

    def find_morphisms_to(self, patch_id: str) -> List[Morphism]:
        return [m for m in self.all_morphisms() if m.to_patch == patch_id]

    # === Motives ===

    @abstractmethod
    def store_motive(self, motive: Motive, patch_id: Optional[str] = None) -> str:
        """Persister un motive, rattaché au patch dont il est dérivé"""
        pass

    @abstractmethod
    def all_motives(self) -> List[Motive]:
        pass

    @abstractmethod
    def motives_for_patch(self, patch_id: str) -> List[Motive]:
        pass

    def stats(self) -> Dict[str, Any]:
        patches = self.all_patches()
        return {
            "patches": len(patches),
            "morphisms": len(self.all_morphisms()),
            "motives": len(self.all_motives()),
            "facts": sum(len(p.facts) for p in patches),
            "sources": len({p.source_id for p in patches if p.source_id is not None}),
        }
