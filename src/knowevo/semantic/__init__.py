from knowevo.semantic.vector_math import (
    centroid,
    cosine_similarity,
    euclidean_distance,
    semantic_similarity,
)

__all__ = [
    "centroid",
    "cosine_similarity",
    "euclidean_distance",
    "semantic_similarity",
]
