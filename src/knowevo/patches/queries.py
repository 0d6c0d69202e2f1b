"""
Requêtes en lecture seule sur un Patch.

Aucune fonction ne modifie le patch ; les résultats sont des listes
fraîches, dans l'ordre des facts/edges du patch.
"""

from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from knowevo.models.fact import Edge, Fact
from knowevo.models.patch import Patch

HIGH_CONFIDENCE = 0.8
LOW_CONFIDENCE = 0.5


@dataclass(frozen=True)
class PatchStats:
    """Statistiques de base d'un patch."""

    num_facts: int
    num_edges: int
    avg_confidence: float
    topics: Dict[Optional[str], int] = field(default_factory=dict)
    edge_types: Dict[str, int] = field(default_factory=dict)


def get_fact(patch: Patch, fact_id: str) -> Optional[Fact]:
    for fact in patch.facts:
        if fact.id == fact_id:
            return fact
    return None


def get_facts_by_topic(patch: Patch, topic: Optional[str]) -> List[Fact]:
    return [f for f in patch.facts if f.topic == topic]


def get_facts_by_confidence(patch: Patch, threshold: float) -> List[Fact]:
    """Facts avec confidence >= threshold."""
    return [f for f in patch.facts if f.confidence >= threshold]


def high_confidence_facts(patch: Patch) -> List[Fact]:
    return get_facts_by_confidence(patch, HIGH_CONFIDENCE)


def uncertain_facts(patch: Patch) -> List[Fact]:
    return [f for f in patch.facts if f.confidence < LOW_CONFIDENCE]


def get_edges_from(patch: Patch, fact_id: str) -> List[Edge]:
    return [e for e in patch.edges if e.from_id == fact_id]


def get_edges_to(patch: Patch, fact_id: str) -> List[Edge]:
    return [e for e in patch.edges if e.to_id == fact_id]


def get_related_facts(patch: Patch, fact_id: str) -> List[Fact]:
    """
    Facts directement reliés à fact_id, dans les deux sens.

    Sortants d'abord puis entrants ; un voisin relié plusieurs fois
    n'apparaît qu'une fois. Les extrémités pendantes sont ignorées.
    """
    index = patch.fact_index()
    related_ids = [e.to_id for e in get_edges_from(patch, fact_id)]
    related_ids += [e.from_id for e in get_edges_to(patch, fact_id)]

    seen = set()
    related = []
    for rid in related_ids:
        if rid in seen or rid not in index:
            continue
        seen.add(rid)
        related.append(index[rid])
    return related


def facts_at_time(patch: Patch, at: datetime) -> List[Fact]:
    """Facts déjà valides à l'instant `at` (valid_from <= at, dates UTC)."""
    return [f for f in patch.facts if f.valid_from <= at]


def revision_chain(facts: Iterable[Fact], fact_id: str) -> List[Fact]:
    """
    Le fact fact_id suivi de toutes ses révisions, triés par valid_from.

    Une révision désigne le fact qu'elle remplace via `revises` ; la chaîne
    est suivie transitivement vers les révisions plus récentes. Pour un id
    présent plusieurs fois, la première occurrence est retenue. Un cycle
    de `revises` ne boucle pas.
    """
    index: Dict[str, Fact] = {}
    revised_by: Dict[str, List[str]] = {}
    for fact in facts:
        if fact.id in index:
            continue
        index[fact.id] = fact
        if fact.revises is not None:
            revised_by.setdefault(fact.revises, []).append(fact.id)

    history = []
    visited = {fact_id}
    queue = deque([fact_id])
    while queue:
        current = queue.popleft()
        if current in index:
            history.append(index[current])
        for revision_id in revised_by.get(current, ()):
            if revision_id not in visited:
                visited.add(revision_id)
                queue.append(revision_id)

    return sorted(history, key=lambda f: f.valid_from)


def revision_history(patch: Patch, fact_id: str) -> List[Fact]:
    return revision_chain(patch.facts, fact_id)


def average_confidence(patch: Patch) -> float:
    if not patch.facts:
        return 0.0
    return sum(f.confidence for f in patch.facts) / len(patch.facts)


def topic_histogram(patch: Patch) -> Dict[Optional[str], int]:
    return dict(Counter(f.topic for f in patch.facts))


def patch_stats(patch: Patch) -> PatchStats:
    return PatchStats(
        num_facts=len(patch.facts),
        num_edges=len(patch.edges),
        avg_confidence=average_confidence(patch),
        topics=topic_histogram(patch),
        edge_types=dict(Counter(e.relation.value for e in patch.edges)),
    )
