"""Graphe des relations entre motives (similarité des centroïdes)."""

from __future__ import annotations

from typing import List, Optional, Sequence

from knowevo.config.engine_config import MotiveGraphConfig
from knowevo.models.motive import Motive, MotiveEdge, MotiveGraph, MotiveRelation
from knowevo.semantic.vector_math import cosine_similarity


def motive_similarity(motive1: Motive, motive2: Motive) -> Optional[float]:
    return cosine_similarity(motive1.centroid, motive2.centroid)


def build_motive_graph(
    motives: Sequence[Motive],
    threshold: Optional[float] = None,
    config: Optional[MotiveGraphConfig] = None,
) -> MotiveGraph:
    """
    Arc "analogous" m1 → m2 pour chaque paire ORDONNÉE de motives distincts
    dont la similarité des centroïdes est >= seuil.

    Chaque paire non ordonnée produit donc deux arcs (un par sens).
    """
    config = config or MotiveGraphConfig()
    threshold = config.threshold if threshold is None else threshold

    edges: List[MotiveEdge] = []
    for m1 in motives:
        for m2 in motives:
            if m1.id == m2.id:
                continue
            sim = motive_similarity(m1, m2)
            if sim is not None and sim >= threshold:
                edges.append(MotiveEdge(
                    from_id=m1.id,
                    to_id=m2.id,
                    relation=MotiveRelation.ANALOGOUS,
                    strength=sim,
                ))

    return MotiveGraph(nodes=tuple(motives), edges=tuple(edges))
