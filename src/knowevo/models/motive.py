# src/knowevo/models/motive.py
"""
Modèle Motive - cluster de concepts découvert dans un Patch.

Un Motive est DÉRIVÉ : il est recalculé dès que l'ensemble des embeddings
du patch source change, il ne constitue jamais une vérité persistée.
"""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict, Field

from knowevo.models.fact import new_id


class MotiveRelation(str, Enum):
    ANALOGOUS = "analogous"


class Motive(BaseModel):
    """
    Cluster de facts sémantiquement proches.

    Attributes:
        id: Identifiant du motive
        concept_words: Mots-concepts ordonnés par fréquence décroissante
        centroid: Centroïde des embeddings membres
        confidence: Heuristique grossière (0.8 si mots-concepts, sinon 0.3)
        cluster_size: Nombre de facts membres
        member_claim_ids: Ids des facts membres
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    concept_words: Tuple[str, ...] = ()
    centroid: Tuple[float, ...] = ()
    confidence: float
    cluster_size: int
    member_claim_ids: FrozenSet[str]


class MotiveEdge(BaseModel):
    """Arc orienté entre deux motives (relation symétrique en pratique)."""

    model_config = ConfigDict(frozen=True)

    from_id: str
    to_id: str
    relation: MotiveRelation = MotiveRelation.ANALOGOUS
    strength: float


class MotiveGraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: Tuple[Motive, ...] = ()
    edges: Tuple[MotiveEdge, ...] = ()

    def neighbors(self, motive_id: str) -> Tuple[str, ...]:
        return tuple(e.to_id for e in self.edges if e.from_id == motive_id)
