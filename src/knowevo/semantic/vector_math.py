"""
Utilitaires vectoriels : cosine, distance euclidienne, centroïde.

Convention : un résultat "indéfini" (vecteur absent, longueurs
différentes, composante NaN / inf, entrée vide pour le centroïde) est
signalé par None, jamais par un nombre arbitraire. Les appelants traitent
None comme "pas similaire".
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

Vector = Sequence[float]


def _as_pair(v1: Optional[Vector], v2: Optional[Vector]) -> Optional[Tuple[np.ndarray, np.ndarray]]:
    if v1 is None or v2 is None:
        return None
    a = np.asarray(v1, dtype=np.float64)
    b = np.asarray(v2, dtype=np.float64)
    if a.ndim != 1 or a.shape != b.shape:
        return None
    # NaN / inf : vecteur malformé, résultat indéfini
    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        return None
    return a, b


def _rescaled(v: np.ndarray) -> Optional[np.ndarray]:
    """v / max|v_i| ; None si v est nul (ou vide)."""
    scale = np.max(np.abs(v)) if v.size else 0.0
    if scale == 0:
        return None
    return v / scale


def cosine_similarity(v1: Optional[Vector], v2: Optional[Vector]) -> Optional[float]:
    """
    Similarité cosine entre deux vecteurs.

    Les vecteurs sont ramenés à max|v_i| = 1 avant le calcul des normes,
    ce qui évite l'underflow des très petites composantes. Un vecteur non
    nul comparé à lui-même donne exactement 1.0.

    Returns:
        None si un vecteur est absent, malformé (NaN / inf) ou si les
        longueurs diffèrent,
        0.0 si l'un des vecteurs est nul,
        sinon dot(v1, v2) / (|v1| * |v2|), borné à [-1, 1].
    """
    pair = _as_pair(v1, v2)
    if pair is None:
        return None
    a, b = pair
    a_scaled = _rescaled(a)
    b_scaled = _rescaled(b)
    if a_scaled is None or b_scaled is None:
        return 0.0
    if np.array_equal(a, b):
        return 1.0
    sim = float(np.dot(a_scaled, b_scaled) / (np.linalg.norm(a_scaled) * np.linalg.norm(b_scaled)))
    # Arrondi flottant : le quotient peut sortir de [-1, 1] d'un ulp
    return max(-1.0, min(1.0, sim))


def euclidean_distance(v1: Optional[Vector], v2: Optional[Vector]) -> Optional[float]:
    """Distance L2, None si les vecteurs sont absents, non finis ou de longueurs différentes."""
    pair = _as_pair(v1, v2)
    if pair is None:
        return None
    a, b = pair
    return float(np.linalg.norm(a - b))


def centroid(vectors: Sequence[Vector]) -> Optional[Tuple[float, ...]]:
    """Moyenne composante par composante ; None sur entrée vide, vecteurs hétérogènes ou non finis."""
    if not vectors:
        return None
    dims = {len(v) for v in vectors}
    if len(dims) != 1:
        return None
    matrix = np.asarray(vectors, dtype=np.float64)
    if not np.all(np.isfinite(matrix)):
        return None
    return tuple(float(x) for x in matrix.mean(axis=0))


def semantic_similarity(
    text1: str,
    text2: str,
    embedder,
    embeddings_cache: Optional[dict] = None,
) -> Optional[float]:
    """
    Similarité entre deux textes via leurs embeddings.

    Le cache (texte → vecteur) est consulté avant l'embedder ; il n'est pas
    modifié.

    Args:
        text1, text2: Textes à comparer
        embedder: Objet exposant embed(text) -> vecteur
        embeddings_cache: Cache optionnel texte → vecteur
    """
    cache = embeddings_cache or {}
    emb1 = cache.get(text1)
    if emb1 is None:
        emb1 = embedder.embed(text1)
    emb2 = cache.get(text2)
    if emb2 is None:
        emb2 = embedder.embed(text2)
    return cosine_similarity(emb1, emb2)
