# src/knowevo/patches/transforms.py
"""
Transformations de Patch.

Chaque fonction retourne un NOUVEAU Patch (model_copy) ; le patch d'entrée
est inchangé. Les éditions de connaissance (add_fact, add_edge,
update_fact_confidence, remove_fact) produisent un nouvel instantané : nouvel
id et nouveau timestamp, sauf keep_identity=True. add_embeddings enrichit le
même instantané et conserve son id.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from knowevo.models.embedding import Embedding
from knowevo.models.fact import Edge, Fact, new_id, utc_now
from knowevo.models.patch import Patch, freeze_metadata


def _derive(patch: Patch, update: Dict[str, Any], keep_identity: bool) -> Patch:
    if not keep_identity:
        update = {**update, "id": new_id(), "timestamp": utc_now()}
    return patch.model_copy(update=update)


def add_fact(patch: Patch, fact: Fact, keep_identity: bool = False) -> Patch:
    return _derive(patch, {"facts": patch.facts + (fact,)}, keep_identity)


def add_edge(patch: Patch, edge: Edge, keep_identity: bool = False) -> Patch:
    return _derive(patch, {"edges": patch.edges + (edge,)}, keep_identity)


def update_fact_confidence(
    patch: Patch,
    fact_id: str,
    new_confidence: float,
    keep_identity: bool = False,
) -> Patch:
    """Remplace le fact fact_id par une copie de même id avec la nouvelle confiance."""
    facts = tuple(
        f.model_copy(update={"confidence": new_confidence}) if f.id == fact_id else f
        for f in patch.facts
    )
    return _derive(patch, {"facts": facts}, keep_identity)


def remove_fact(patch: Patch, fact_id: str, keep_identity: bool = False) -> Patch:
    """Retire un fact ainsi que ses edges (entrants/sortants) et son embedding."""
    return _derive(patch, {
        "facts": tuple(f for f in patch.facts if f.id != fact_id),
        "edges": tuple(
            e for e in patch.edges if e.from_id != fact_id and e.to_id != fact_id
        ),
        "embeddings": tuple(e for e in patch.embeddings if e.claim_ref != fact_id),
    }, keep_identity)


def add_embeddings(patch: Patch, embeddings: Iterable[Embedding]) -> Patch:
    """
    Ajoute des embeddings ; un nouvel embedding remplace l'existant du même fact.
    """
    incoming = {e.claim_ref: e for e in embeddings}
    kept = tuple(e for e in patch.embeddings if e.claim_ref not in incoming)
    return patch.model_copy(update={"embeddings": kept + tuple(incoming.values())})


def with_new_identity(patch: Patch, metadata: Optional[dict] = None) -> Patch:
    """Même contenu, nouvel id et nouveau timestamp."""
    update = {}
    if metadata is not None:
        update["metadata"] = freeze_metadata({**patch.metadata, **metadata})
    return _derive(patch, update, keep_identity=False)
