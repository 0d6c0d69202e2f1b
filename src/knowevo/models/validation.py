# src/knowevo/models/validation.py
"""
Validation structurelle d'un Patch.

Retourne soit "valide", soit l'explication structurée de CHAQUE invariant
violé. Ne répare jamais rien : l'appelant décide (rejet + rapport).
"""

from __future__ import annotations

import math
from collections import Counter
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from knowevo.models.patch import Patch

MIN_LOD = 0
MAX_LOD = 3


class ViolationCode(str, Enum):
    DUPLICATE_FACT_ID = "duplicate_fact_id"
    DUPLICATE_EDGE_ID = "duplicate_edge_id"
    DANGLING_EDGE_ENDPOINT = "dangling_edge_endpoint"
    CONFIDENCE_OUT_OF_RANGE = "confidence_out_of_range"
    STRENGTH_OUT_OF_RANGE = "strength_out_of_range"
    LOD_OUT_OF_RANGE = "lod_out_of_range"
    EMBEDDING_UNKNOWN_CLAIM = "embedding_unknown_claim"
    DUPLICATE_EMBEDDING = "duplicate_embedding"
    EMBEDDING_DIMENSION_MISMATCH = "embedding_dimension_mismatch"
    NON_FINITE_EMBEDDING = "non_finite_embedding"


class Violation(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: ViolationCode
    message: str
    entity_id: Optional[str] = None


class ValidationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: bool
    violations: Tuple[Violation, ...] = ()

    def codes(self) -> List[ViolationCode]:
        return [v.code for v in self.violations]


def _in_unit_range(value: float) -> bool:
    return 0.0 <= value <= 1.0


def validate_patch(patch: Patch) -> ValidationReport:
    """
    Vérifie les invariants structurels d'un patch.

    - ids de facts uniques, ids d'edges uniques
    - extrémités d'edges présentes dans les facts du patch
    - confidence / strength dans [0, 1], lod dans [0, 3]
    - au plus un embedding par fact, rattaché à un fact existant
    - dimension constante par modèle d'embedding
    - composantes d'embedding finies (ni NaN ni inf)
    """
    violations: List[Violation] = []

    fact_counts = Counter(f.id for f in patch.facts)
    for fact_id, count in fact_counts.items():
        if count > 1:
            violations.append(Violation(
                code=ViolationCode.DUPLICATE_FACT_ID,
                message=f"Fact id {fact_id} présent {count} fois",
                entity_id=fact_id,
            ))

    for fact in patch.facts:
        if not _in_unit_range(fact.confidence):
            violations.append(Violation(
                code=ViolationCode.CONFIDENCE_OUT_OF_RANGE,
                message=f"Confiance {fact.confidence} hors [0, 1]",
                entity_id=fact.id,
            ))
        if not MIN_LOD <= fact.lod <= MAX_LOD:
            violations.append(Violation(
                code=ViolationCode.LOD_OUT_OF_RANGE,
                message=f"LOD {fact.lod} hors [{MIN_LOD}, {MAX_LOD}]",
                entity_id=fact.id,
            ))

    edge_counts = Counter(e.id for e in patch.edges)
    for edge_id, count in edge_counts.items():
        if count > 1:
            violations.append(Violation(
                code=ViolationCode.DUPLICATE_EDGE_ID,
                message=f"Edge id {edge_id} présent {count} fois",
                entity_id=edge_id,
            ))

    for edge in patch.edges:
        for endpoint in (edge.from_id, edge.to_id):
            if endpoint not in fact_counts:
                violations.append(Violation(
                    code=ViolationCode.DANGLING_EDGE_ENDPOINT,
                    message=f"Edge {edge.id} référence le fact inconnu {endpoint}",
                    entity_id=edge.id,
                ))
        if not _in_unit_range(edge.strength):
            violations.append(Violation(
                code=ViolationCode.STRENGTH_OUT_OF_RANGE,
                message=f"Force {edge.strength} hors [0, 1]",
                entity_id=edge.id,
            ))

    embedding_counts = Counter(e.claim_ref for e in patch.embeddings)
    dimensions = {}
    for embedding in patch.embeddings:
        if embedding.claim_ref not in fact_counts:
            violations.append(Violation(
                code=ViolationCode.EMBEDDING_UNKNOWN_CLAIM,
                message=f"Embedding {embedding.id} rattaché au fact inconnu {embedding.claim_ref}",
                entity_id=embedding.id,
            ))
        expected = dimensions.setdefault(embedding.model, embedding.dimension)
        if embedding.dimension != expected:
            violations.append(Violation(
                code=ViolationCode.EMBEDDING_DIMENSION_MISMATCH,
                message=(
                    f"Embedding {embedding.id} ({embedding.model}): "
                    f"dimension {embedding.dimension}, attendu {expected}"
                ),
                entity_id=embedding.id,
            ))
        if not all(math.isfinite(x) for x in embedding.vector):
            violations.append(Violation(
                code=ViolationCode.NON_FINITE_EMBEDDING,
                message=f"Embedding {embedding.id} ({embedding.claim_ref}): composante NaN ou infinie",
                entity_id=embedding.id,
            ))

    for claim_ref, count in embedding_counts.items():
        if count > 1:
            violations.append(Violation(
                code=ViolationCode.DUPLICATE_EMBEDDING,
                message=f"{count} embeddings pour le fact {claim_ref}",
                entity_id=claim_ref,
            ))

    return ValidationReport(valid=not violations, violations=tuple(violations))


def is_valid_patch(patch: Patch) -> bool:
    return validate_patch(patch).valid
