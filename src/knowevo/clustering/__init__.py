"""
Clustering par similarité d'embeddings.

- build_similarity_graph / connected_components / cluster_by_similarity
- extract_motive / extract_all_motives : clusters → Motives
- build_motive_graph : relations "analogous" entre motives
- find_duplicates / merge_duplicates : déduplication sémantique
"""

from knowevo.clustering.deduplication import find_duplicates, merge_duplicates
from knowevo.clustering.motive_extractor import (
    STOP_WORDS,
    extract_all_motives,
    extract_concept_words,
    extract_motive,
    tokenize,
)
from knowevo.clustering.motive_graph import build_motive_graph, motive_similarity
from knowevo.clustering.similarity_graph import (
    SimilarityEdge,
    SimilarityGraph,
    build_similarity_graph,
    cluster_by_similarity,
    connected_components,
)

__all__ = [
    "find_duplicates",
    "merge_duplicates",
    "STOP_WORDS",
    "extract_all_motives",
    "extract_concept_words",
    "extract_motive",
    "tokenize",
    "build_motive_graph",
    "motive_similarity",
    "SimilarityEdge",
    "SimilarityGraph",
    "build_similarity_graph",
    "cluster_by_similarity",
    "connected_components",
]
