# src/knowevo/clustering/deduplication.py
"""
Déduplication sémantique des facts d'un patch.

Deux facts dont les embeddings ont une similarité >= seuil (0.92 par
défaut) sont des doublons. Les paires sont regroupées par Union-Find ;
chaque groupe garde UN fact canonique :
- confiance la plus haute
- à égalité, le premier dans l'ordre du patch

merge_duplicates() retourne un nouveau patch sans les doublons, avec les
edges redirigés vers les canoniques.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Mapping, Optional, Sequence

from knowevo.config.engine_config import DeduplicationConfig
from knowevo.models.patch import Patch
from knowevo.semantic.vector_math import cosine_similarity

logger = logging.getLogger(__name__)


def find_duplicates(
    patch: Patch,
    similarity_threshold: Optional[float] = None,
    config: Optional[DeduplicationConfig] = None,
) -> Dict[str, List[str]]:
    """
    Trouve les groupes de doublons.

    Returns:
        {canonical_id: [duplicate_ids]} ; doublons dans l'ordre du patch.
    """
    config = config or DeduplicationConfig()
    threshold = config.similarity_threshold if similarity_threshold is None else similarity_threshold

    vectors = {e.claim_ref: e.vector for e in patch.embeddings}
    facts = [f for f in patch.facts if f.id in vectors]
    order = {f.id: i for i, f in enumerate(patch.facts)}
    confidence = {f.id: f.confidence for f in patch.facts}

    # Union-Find itératif
    parent: Dict[str, str] = {}

    def find(x: str) -> str:
        parent.setdefault(x, x)
        root = x
        while parent[root] != root:
            root = parent[root]
        while parent[x] != root:
            parent[x], x = root, parent[x]
        return root

    def union(x: str, y: str) -> None:
        px, py = find(x), find(y)
        if px != py:
            parent[px] = py

    pairs = 0
    for i, f1 in enumerate(facts):
        for f2 in facts[i + 1:]:
            if f1.id == f2.id:
                continue
            sim = cosine_similarity(vectors[f1.id], vectors[f2.id])
            if sim is not None and sim >= threshold:
                union(f1.id, f2.id)
                pairs += 1

    groups: Dict[str, List[str]] = defaultdict(list)
    for fact_id in parent:
        groups[find(fact_id)].append(fact_id)

    duplicates: Dict[str, List[str]] = {}
    for members in groups.values():
        if len(members) < 2:
            continue
        members = sorted(set(members), key=lambda fid: order[fid])
        canonical = max(members, key=lambda fid: (confidence[fid], -order[fid]))
        duplicates[canonical] = [fid for fid in members if fid != canonical]

    logger.info(
        f"[EVO:Dedup] {pairs} paires similaires → {len(duplicates)} groupes de doublons "
        f"(seuil {threshold})"
    )
    return duplicates


def merge_duplicates(patch: Patch, duplicates: Mapping[str, Sequence[str]]) -> Patch:
    """
    Retire les doublons et redirige les edges vers les facts canoniques.

    Les edges devenus des boucles (canonique → lui-même) sont supprimés,
    ainsi que les embeddings des doublons retirés.
    """
    canonical_of = {
        dup: canonical
        for canonical, dups in duplicates.items()
        for dup in dups
    }
    if not canonical_of:
        return patch

    facts = tuple(f for f in patch.facts if f.id not in canonical_of)

    edges = []
    dropped_loops = 0
    for edge in patch.edges:
        from_id = canonical_of.get(edge.from_id, edge.from_id)
        to_id = canonical_of.get(edge.to_id, edge.to_id)
        if from_id == to_id:
            dropped_loops += 1
            continue
        if from_id != edge.from_id or to_id != edge.to_id:
            edge = edge.model_copy(update={"from_id": from_id, "to_id": to_id})
        edges.append(edge)

    embeddings = tuple(e for e in patch.embeddings if e.claim_ref not in canonical_of)

    logger.info(
        f"[EVO:Dedup] {len(canonical_of)} doublons fusionnés dans "
        f"{len(duplicates)} facts canoniques ({dropped_loops} boucles retirées)"
    )
    return patch.model_copy(update={
        "facts": facts,
        "edges": tuple(edges),
        "embeddings": embeddings,
    })
