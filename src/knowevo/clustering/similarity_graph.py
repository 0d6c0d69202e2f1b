# src/knowevo/clustering/similarity_graph.py
"""
Graphe de similarité et composantes connexes.

Étape 1: Graphe non orienté fact ↔ fact si cosine(emb1, emb2) >= seuil
Étape 2: Composantes connexes (BFS itératif, visited par appel)
Étape 3: Les singletons sont écartés, seuls les clusters de taille >= 2
         deviennent des candidats motives.

Complexité O(n²) en nombre de facts embarqués : limite d'échelle
documentée. Le calcul pairwise peut être découpé par lignes sur un pool
de threads ; chaque tâche retourne son propre ensemble d'arcs et la
fusion est une simple union, indépendante de l'ordre.
"""

from __future__ import annotations

import logging
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

import numpy as np

from knowevo.config.engine_config import ClusteringConfig
from knowevo.models.embedding import Embedding
from knowevo.models.patch import Patch
from knowevo.semantic.vector_math import cosine_similarity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimilarityEdge:
    """Arc non orienté ; source < target (ordre lexical) pour l'unicité."""

    source: str
    target: str
    weight: float


@dataclass(frozen=True)
class SimilarityGraph:
    nodes: FrozenSet[str]
    edges: Tuple[SimilarityEdge, ...]

    def adjacency(self) -> Dict[str, Set[str]]:
        """Liste d'adjacence non orientée, reconstruite à chaque appel."""
        adj: Dict[str, Set[str]] = {node: set() for node in self.nodes}
        for edge in self.edges:
            adj.setdefault(edge.source, set()).add(edge.target)
            adj.setdefault(edge.target, set()).add(edge.source)
        return adj


def _compare_rows(
    rows: range,
    claim_refs: Sequence[str],
    vectors: Sequence[np.ndarray],
    threshold: float,
) -> Set[SimilarityEdge]:
    """Compare chaque ligne i de `rows` avec toutes les colonnes j > i."""
    edges: Set[SimilarityEdge] = set()
    n = len(claim_refs)
    for i in rows:
        ref_i = claim_refs[i]
        for j in range(i + 1, n):
            ref_j = claim_refs[j]
            if ref_i == ref_j:
                continue
            sim = cosine_similarity(vectors[i], vectors[j])
            # None (longueurs incompatibles) = pas similaire
            if sim is None or sim < threshold:
                continue
            source, target = (ref_i, ref_j) if ref_i <= ref_j else (ref_j, ref_i)
            edges.add(SimilarityEdge(source=source, target=target, weight=sim))
    return edges


def _row_chunks(n: int, workers: int) -> List[range]:
    """
    Découpe les lignes en blocs de charge pairwise comparable.

    La ligne i porte n-1-i comparaisons : des blocs de taille égale seraient
    déséquilibrés, on coupe donc sur le nombre cumulé de paires.
    """
    total_pairs = n * (n - 1) // 2
    target = max(1, total_pairs // workers)
    chunks: List[range] = []
    start = 0
    acc = 0
    for i in range(n):
        acc += n - 1 - i
        if acc >= target and len(chunks) < workers - 1:
            chunks.append(range(start, i + 1))
            start = i + 1
            acc = 0
    if start < n:
        chunks.append(range(start, n))
    return chunks


def build_similarity_graph(
    embeddings: Sequence[Embedding],
    threshold: float,
    max_workers: int = 1,
    min_pairs_per_worker: int = 2000,
) -> SimilarityGraph:
    """
    Construit le graphe de similarité sur un ensemble d'embeddings.

    Args:
        embeddings: Embeddings (un par fact)
        threshold: Seuil cosine inclusif
        max_workers: Threads pour le calcul pairwise (1 = séquentiel)
        min_pairs_per_worker: Nombre minimal de paires par thread

    Returns:
        SimilarityGraph dont les nœuds sont les claim_ref
    """
    claim_refs = [e.claim_ref for e in embeddings]
    vectors = [np.asarray(e.vector, dtype=np.float64) for e in embeddings]
    n = len(claim_refs)
    total_pairs = n * (n - 1) // 2

    workers = min(max_workers, max(1, total_pairs // max(1, min_pairs_per_worker)))
    if workers <= 1:
        edge_set = _compare_rows(range(n), claim_refs, vectors, threshold)
    else:
        chunks = _row_chunks(n, workers)
        logger.debug(
            f"[EVO:SimilarityGraph] {total_pairs} paires réparties sur "
            f"{len(chunks)} tâches ({workers} threads)"
        )
        edge_set = set()
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_compare_rows, chunk, claim_refs, vectors, threshold)
                for chunk in chunks
            ]
            for future in futures:
                edge_set |= future.result()

    # Un fact embarqué deux fois peut produire deux poids pour une même paire
    best: Dict[Tuple[str, str], SimilarityEdge] = {}
    for edge in edge_set:
        key = (edge.source, edge.target)
        if key not in best or edge.weight > best[key].weight:
            best[key] = edge

    edges = tuple(best[key] for key in sorted(best))
    return SimilarityGraph(nodes=frozenset(claim_refs), edges=edges)


def connected_components(graph: SimilarityGraph) -> List[FrozenSet[str]]:
    """
    Composantes connexes maximales (BFS itératif).

    L'ensemble visited est propre à cet appel. Les composantes sont
    retournées dans l'ordre lexical de leur plus petit nœud.
    """
    adj = graph.adjacency()
    visited: Set[str] = set()
    components: List[FrozenSet[str]] = []

    for start in sorted(adj):
        if start in visited:
            continue
        visited.add(start)
        component = {start}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            for neighbor in adj[node]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    component.add(neighbor)
                    queue.append(neighbor)
        components.append(frozenset(component))

    return components


def cluster_by_similarity(
    patch: Patch,
    threshold: Optional[float] = None,
    config: Optional[ClusteringConfig] = None,
) -> List[FrozenSet[str]]:
    """
    Clusters de facts par similarité (taille >= 2).

    Un patch sans embeddings donne une liste vide et un warning, jamais
    une erreur.
    """
    config = config or ClusteringConfig()
    threshold = config.similarity_threshold if threshold is None else threshold

    if not patch.embeddings:
        logger.warning(
            f"[EVO:Clustering] Patch {patch.id} sans embeddings, clustering impossible"
        )
        return []

    graph = build_similarity_graph(
        patch.embeddings,
        threshold,
        max_workers=config.max_workers,
        min_pairs_per_worker=config.min_pairs_per_worker,
    )
    clusters = [c for c in connected_components(graph) if len(c) > 1]

    logger.info(
        f"[EVO:Clustering] {len(clusters)} clusters depuis {len(graph.nodes)} facts "
        f"({len(graph.edges)} arcs, seuil {threshold})"
    )
    return clusters
