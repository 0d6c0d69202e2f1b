"""
Modèles du moteur knowevo.

Tous les modèles sont des valeurs pydantic gelées (frozen) : aucune
mutation en place, chaque transformation retourne une nouvelle valeur.
"""

from knowevo.models.embedding import Embedding
from knowevo.models.fact import (
    Edge,
    EdgeRelation,
    Fact,
    make_edge,
    make_fact,
    new_id,
    utc_now,
)
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
from knowevo.models.motive import Motive, MotiveEdge, MotiveGraph, MotiveRelation
from knowevo.models.patch import Patch, make_patch
from knowevo.models.validation import (
    ValidationReport,
    Violation,
    ViolationCode,
    is_valid_patch,
    validate_patch,
)

__all__ = [
    "Embedding",
    "Edge",
    "EdgeRelation",
    "Fact",
    "make_edge",
    "make_fact",
    "new_id",
    "utc_now",
    "EDGE_OPERATIONS",
    "AddEdgeOp",
    "AddFactOp",
    "Morphism",
    "MorphismDelta",
    "MorphismType",
    "Operation",
    "OperationKind",
    "RemoveEdgeOp",
    "RemoveFactOp",
    "UpdateConfidenceOp",
    "Motive",
    "MotiveEdge",
    "MotiveGraph",
    "MotiveRelation",
    "Patch",
    "make_patch",
    "ValidationReport",
    "Violation",
    "ViolationCode",
    "is_valid_patch",
    "validate_patch",
]
