# src/knowevo/morphism/diff.py
"""
Calcul du morphism (diff) entre deux patches.

Facts : added = ids(to) - ids(from), removed = ids(from) - ids(to) ; pour
chaque id commun dont la confiance diffère → update-confidence (old/new).
Aucun autre champ de fact n'est diffé.

Edges : diff purement structurel par id (add-edge / remove-edge), jamais
de mise à jour en place.

Ordre des opérations (déterministe) :
add-fact, remove-fact, update-confidence, add-edge, remove-edge ; dans
chaque groupe, l'ordre des éléments dans leur patch d'origine.

Classification (première règle qui matche) :
1. remove-fact présent                          → REFUTATION
2. add-fact sans opération d'edge               → ADDITIVE
3. update-confidence sans add-fact ni edge      → REFINEMENT
4. opération d'edge sans add-fact               → REORGANIZATION
5. sinon (y compris diff vide)                  → TRANSITION
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from knowevo.config.engine_config import InformationGainWeights
from knowevo.models.morphism import (
    EDGE_OPERATIONS,
    AddEdgeOp,
    AddFactOp,
    Morphism,
    MorphismDelta,
    MorphismType,
    Operation,
    OperationKind,
    RemoveEdgeOp,
    RemoveFactOp,
    UpdateConfidenceOp,
)
from knowevo.models.motive import Motive
from knowevo.models.patch import Patch
from knowevo.morphism.information_gain import compute_information_gain

logger = logging.getLogger(__name__)


def fact_operations(from_patch: Patch, to_patch: Patch) -> List[Operation]:
    """Opérations atomiques sur les facts."""
    old = from_patch.fact_index()
    new = to_patch.fact_index()

    added = [AddFactOp(fact_id=f.id, fact=f) for f in to_patch.facts if f.id not in old]
    removed = [RemoveFactOp(fact_id=f.id) for f in from_patch.facts if f.id not in new]

    updates = []
    for fact in from_patch.facts:
        if fact.id not in new:
            continue
        old_conf = old[fact.id].confidence
        new_conf = new[fact.id].confidence
        if old_conf != new_conf:
            updates.append(UpdateConfidenceOp(fact_id=fact.id, old=old_conf, new=new_conf))

    return (
        _dedupe_by_key(added, "fact_id")
        + _dedupe_by_key(removed, "fact_id")
        + _dedupe_by_key(updates, "fact_id")
    )


def edge_operations(from_patch: Patch, to_patch: Patch) -> List[Operation]:
    """Opérations atomiques sur les edges (structurelles, par id)."""
    old_ids = {e.id for e in from_patch.edges}
    new_ids = {e.id for e in to_patch.edges}

    added = [AddEdgeOp(edge_id=e.id, edge=e) for e in to_patch.edges if e.id not in old_ids]
    removed = [RemoveEdgeOp(edge_id=e.id) for e in from_patch.edges if e.id not in new_ids]
    return _dedupe_by_key(added, "edge_id") + _dedupe_by_key(removed, "edge_id")


def _dedupe_by_key(ops: list, key: str) -> list:
    """Un id dupliqué dans un patch (invalide) ne compte qu'une fois."""
    seen = set()
    result = []
    for op in ops:
        value = getattr(op, key)
        if value in seen:
            continue
        seen.add(value)
        result.append(op)
    return result


def diff_patches(from_patch: Patch, to_patch: Patch) -> List[Operation]:
    if not from_patch.facts and not to_patch.facts:
        logger.warning(
            f"[EVO:Morphism] Diff {from_patch.id} → {to_patch.id}: aucun fact des deux côtés"
        )
    return fact_operations(from_patch, to_patch) + edge_operations(from_patch, to_patch)


def classify_operations(operations: Sequence[Operation]) -> MorphismType:
    """Classe un ensemble d'opérations selon l'ordre de priorité fixe."""
    kinds = {OperationKind(op.op) for op in operations}
    has_adds = OperationKind.ADD_FACT in kinds
    has_removes = OperationKind.REMOVE_FACT in kinds
    has_updates = OperationKind.UPDATE_CONFIDENCE in kinds
    has_edge_changes = bool(kinds & EDGE_OPERATIONS)

    if has_removes:
        return MorphismType.REFUTATION
    if has_adds and not has_edge_changes:
        return MorphismType.ADDITIVE
    if has_updates and not has_adds and not has_edge_changes:
        return MorphismType.REFINEMENT
    if has_edge_changes and not has_adds:
        return MorphismType.REORGANIZATION
    return MorphismType.TRANSITION


def compute_delta(operations: Sequence[Operation]) -> MorphismDelta:
    counts = {kind: 0 for kind in OperationKind}
    for op in operations:
        counts[OperationKind(op.op)] += 1
    return MorphismDelta(
        facts_added=counts[OperationKind.ADD_FACT],
        facts_removed=counts[OperationKind.REMOVE_FACT],
        edges_added=counts[OperationKind.ADD_EDGE],
        edges_removed=counts[OperationKind.REMOVE_EDGE],
    )


def compute_morphism(
    from_patch: Patch,
    to_patch: Patch,
    reason: str = "Transition",
    author: str = "system",
    motives_from: Optional[Sequence[Motive]] = None,
    motives_to: Optional[Sequence[Motive]] = None,
    weights: Optional[InformationGainWeights] = None,
) -> Morphism:
    """
    Calcule le morphism from_patch → to_patch, gain d'information inclus.

    Args:
        from_patch: Patch source
        to_patch: Patch cible
        reason: Motif libre
        author: Auteur
        motives_from: Motives du patch source (optionnel, pour le gain)
        motives_to: Motives du patch cible (optionnel, pour le gain)
        weights: Pondérations du gain d'information

    Returns:
        Morphism immuable
    """
    operations = diff_patches(from_patch, to_patch)
    morphism_type = classify_operations(operations)
    delta = compute_delta(operations)

    has_motives = motives_from is not None and motives_to is not None
    gain = compute_information_gain(
        delta,
        from_patch,
        to_patch,
        motive_count_from=len(motives_from) if has_motives else None,
        motive_count_to=len(motives_to) if has_motives else None,
        weights=weights,
    )

    logger.debug(
        f"[EVO:Morphism] {from_patch.id} → {to_patch.id}: {morphism_type.value}, "
        f"{len(operations)} ops, gain={gain:.3f}"
    )

    return Morphism(
        from_patch=from_patch.id,
        to_patch=to_patch.id,
        type=morphism_type,
        author=author,
        reason=reason,
        operations=tuple(operations),
        delta=delta,
        information_gain=gain,
    )
