"""Rattachement des embeddings aux facts d'un patch."""

from __future__ import annotations

import logging
from typing import Optional

from knowevo.common.errors import EmbeddingDimensionError
from knowevo.ingestion.interfaces import Embedder
from knowevo.models.embedding import Embedding
from knowevo.models.patch import Patch
from knowevo.patches.transforms import add_embeddings

logger = logging.getLogger(__name__)


def attach_embeddings(patch: Patch, embedder: Embedder, model: Optional[str] = None) -> Patch:
    """
    Embarque le texte de chaque fact et retourne un nouveau patch.

    Seule la cohérence des longueurs dans le batch est vérifiée : la
    qualité sémantique des vecteurs n'est pas du ressort du moteur.

    Raises:
        EmbeddingDimensionError: si un vecteur n'a pas la longueur du premier
    """
    if not patch.facts:
        return patch

    model = model or embedder.model_name
    vectors = embedder.embed_batch([f.text for f in patch.facts])
    if len(vectors) != len(patch.facts):
        raise ValueError(
            f"Embedder '{model}': {len(vectors)} vecteurs pour {len(patch.facts)} facts"
        )

    expected = None
    embeddings = []
    for fact, vector in zip(patch.facts, vectors):
        vector = tuple(float(x) for x in vector)
        if expected is None:
            expected = len(vector)
        elif len(vector) != expected:
            raise EmbeddingDimensionError(model, expected, len(vector), fact.id)
        embeddings.append(Embedding(claim_ref=fact.id, model=model, vector=vector))

    logger.info(
        f"[EVO:Embeddings] {len(embeddings)} embeddings '{model}' (dim {expected}) "
        f"pour le patch {patch.id}"
    )
    return add_embeddings(patch, embeddings)
