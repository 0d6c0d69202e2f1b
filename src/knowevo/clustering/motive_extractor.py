# src/knowevo/clustering/motive_extractor.py
"""
MotiveExtractor - transforme les clusters de similarité en Motives.

Pour chaque cluster (taille >= 2) :
- centroïde des embeddings membres
- mots-concepts : tokens minuscules, hors stop words, top-K par
  fréquence décroissante (égalités départagées par première apparition)
- confiance : heuristique grossière, 0.8 si au moins un mot-concept,
  sinon 0.3 (placeholder, pas un score statistique)
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import AbstractSet, List, Optional, Sequence

from knowevo.clustering.similarity_graph import cluster_by_similarity
from knowevo.config.engine_config import ClusteringConfig
from knowevo.models.fact import Fact
from knowevo.models.motive import Motive
from knowevo.models.patch import Patch
from knowevo.semantic.vector_math import centroid

logger = logging.getLogger(__name__)

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at",
    "to", "for", "of", "with", "by", "is", "are", "was", "were",
})

CONFIDENCE_WITH_CONCEPTS = 0.8
CONFIDENCE_WITHOUT_CONCEPTS = 0.3

_NON_WORD = re.compile(r"\W+")


def tokenize(text: str) -> List[str]:
    return [t for t in _NON_WORD.split(text.lower()) if t]


def extract_concept_words(facts: Sequence[Fact], top_k: int = 5) -> List[str]:
    """
    Mots les plus fréquents d'un ensemble de facts.

    Counter.most_common est stable : à fréquence égale, l'ordre de première
    apparition est conservé.
    """
    if top_k <= 0:
        return []
    counts: Counter = Counter()
    for fact in facts:
        counts.update(t for t in tokenize(fact.text) if t not in STOP_WORDS)
    return [word for word, _ in counts.most_common(top_k)]


def extract_motive(
    patch: Patch,
    cluster_ids: AbstractSet[str],
    concept_words_count: int = 5,
) -> Motive:
    """
    Construit le Motive d'un cluster.

    Args:
        patch: Patch source (facts + embeddings)
        cluster_ids: Ids des facts du cluster
        concept_words_count: K mots-concepts

    Returns:
        Motive (cluster_size == len(cluster_ids))
    """
    facts = [f for f in patch.facts if f.id in cluster_ids]
    vectors = [e.vector for e in patch.embeddings if e.claim_ref in cluster_ids]

    concept_words = extract_concept_words(facts, concept_words_count)
    confidence = CONFIDENCE_WITH_CONCEPTS if concept_words else CONFIDENCE_WITHOUT_CONCEPTS

    return Motive(
        concept_words=tuple(concept_words),
        centroid=centroid(vectors) or (),
        confidence=confidence,
        cluster_size=len(cluster_ids),
        member_claim_ids=frozenset(cluster_ids),
    )


def extract_all_motives(
    patch: Patch,
    similarity_threshold: Optional[float] = None,
    concept_words_count: Optional[int] = None,
    config: Optional[ClusteringConfig] = None,
) -> List[Motive]:
    """Clustering puis extraction sur chaque cluster qualifiant."""
    config = config or ClusteringConfig()
    threshold = config.similarity_threshold if similarity_threshold is None else similarity_threshold
    top_k = config.concept_words_count if concept_words_count is None else concept_words_count

    clusters = cluster_by_similarity(patch, threshold=threshold, config=config)
    motives = [extract_motive(patch, cluster, concept_words_count=top_k) for cluster in clusters]

    logger.info(f"[EVO:Motives] {len(motives)} motives extraits du patch {patch.id}")
    return motives
