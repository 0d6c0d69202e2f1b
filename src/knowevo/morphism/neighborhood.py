"""
Voisinage de Yoneda d'un patch.

Le voisinage caractérise un patch par ce qui l'entoure :
- patches prédécesseurs (morphisms dont to_patch == ce patch)
- patches successeurs (morphisms dont from_patch == ce patch)
- réponses aux requêtes sémantiques nommées fournies
- résumé structurel (facts, edges, confiance moyenne, histogramme des topics)

Deux patches sont Yoneda-équivalents ssi leurs voisinages, calculés avec
le même ensemble de morphisms et de requêtes, sont structurellement égaux
(l'id du patch lui-même n'entre pas dans la comparaison).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Tuple

from knowevo.models.morphism import Morphism
from knowevo.models.patch import Patch
from knowevo.patches.queries import average_confidence, topic_histogram

SemanticQuery = Callable[[Patch], Any]


@dataclass(frozen=True)
class StructuralSummary:
    num_facts: int
    num_edges: int
    avg_confidence: float
    topics: Dict[Optional[str], int] = field(default_factory=dict)


@dataclass(frozen=True)
class MorphismNeighborhood:
    patch_id: str
    predecessors: Tuple[str, ...]
    successors: Tuple[str, ...]
    semantic_responses: Dict[str, Any]
    structural: StructuralSummary

    def structurally_equal(self, other: "MorphismNeighborhood") -> bool:
        return (
            self.predecessors == other.predecessors
            and self.successors == other.successors
            and self.semantic_responses == other.semantic_responses
            and self.structural == other.structural
        )


def morphism_neighborhood(
    patch: Patch,
    morphisms: Sequence[Morphism] = (),
    semantic_queries: Optional[Mapping[str, SemanticQuery]] = None,
) -> MorphismNeighborhood:
    """
    Calcule le voisinage de Yoneda d'un patch.

    Les ids de prédécesseurs/successeurs sont triés : le voisinage ne dépend
    pas de l'ordre de la liste de morphisms.
    """
    predecessors = sorted(m.from_patch for m in morphisms if m.to_patch == patch.id)
    successors = sorted(m.to_patch for m in morphisms if m.from_patch == patch.id)

    responses = {
        name: query(patch)
        for name, query in (semantic_queries or {}).items()
    }

    structural = StructuralSummary(
        num_facts=len(patch.facts),
        num_edges=len(patch.edges),
        avg_confidence=average_confidence(patch),
        topics=topic_histogram(patch),
    )

    return MorphismNeighborhood(
        patch_id=patch.id,
        predecessors=tuple(predecessors),
        successors=tuple(successors),
        semantic_responses=responses,
        structural=structural,
    )


def yoneda_equivalent(
    patch1: Patch,
    patch2: Patch,
    morphisms: Sequence[Morphism] = (),
    semantic_queries: Optional[Mapping[str, SemanticQuery]] = None,
) -> bool:
    n1 = morphism_neighborhood(patch1, morphisms, semantic_queries)
    n2 = morphism_neighborhood(patch2, morphisms, semantic_queries)
    return n1.structurally_equal(n2)
