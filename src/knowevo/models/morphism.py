# src/knowevo/models/morphism.py
"""
Modèle Morphism - transition calculée entre deux Patches.

Un Morphism est créé une fois (par le diff ou par chaînage) puis jamais
modifié. Il porte :
- la liste ordonnée des opérations atomiques
- les compteurs de delta
- le type de transition (classification par priorité)
- le gain d'information dans [0, 1]
- la chaîne des composants si type == COMPOSITE
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from knowevo.models.fact import Edge, Fact, new_id, utc_now


class MorphismType(str, Enum):
    """Type de transition entre deux patches."""

    ADDITIVE = "additive"
    """Nouveaux facts, aucune modification structurelle."""

    REFINEMENT = "refinement"
    """Uniquement des changements de confiance."""

    REORGANIZATION = "reorganization"
    """Changements d'edges sans nouveaux facts."""

    REFUTATION = "refutation"
    """Au moins un fact retiré (prioritaire sur tout le reste)."""

    TRANSITION = "transition"
    """Cas par défaut, y compris le diff vide."""

    COMPOSITE = "composite"
    """Chaînage de plusieurs morphisms."""


class OperationKind(str, Enum):
    ADD_FACT = "add-fact"
    REMOVE_FACT = "remove-fact"
    UPDATE_CONFIDENCE = "update-confidence"
    ADD_EDGE = "add-edge"
    REMOVE_EDGE = "remove-edge"


EDGE_OPERATIONS = frozenset({OperationKind.ADD_EDGE, OperationKind.REMOVE_EDGE})


class AddFactOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    op: Literal["add-fact"] = "add-fact"
    fact_id: str
    fact: Fact


class RemoveFactOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    op: Literal["remove-fact"] = "remove-fact"
    fact_id: str


class UpdateConfidenceOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    op: Literal["update-confidence"] = "update-confidence"
    fact_id: str
    old: float
    new: float

    @property
    def change(self) -> float:
        return self.new - self.old


class AddEdgeOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    op: Literal["add-edge"] = "add-edge"
    edge_id: str
    edge: Edge


class RemoveEdgeOp(BaseModel):
    model_config = ConfigDict(frozen=True)

    op: Literal["remove-edge"] = "remove-edge"
    edge_id: str


Operation = Annotated[
    Union[AddFactOp, RemoveFactOp, UpdateConfidenceOp, AddEdgeOp, RemoveEdgeOp],
    Field(discriminator="op"),
]


class MorphismDelta(BaseModel):
    """Compteurs d'un diff."""

    model_config = ConfigDict(frozen=True)

    facts_added: int = 0
    facts_removed: int = 0
    edges_added: int = 0
    edges_removed: int = 0

    def combine(self, other: "MorphismDelta") -> "MorphismDelta":
        """Somme composante par composante (utilisée par le chaînage)."""
        return MorphismDelta(
            facts_added=self.facts_added + other.facts_added,
            facts_removed=self.facts_removed + other.facts_removed,
            edges_added=self.edges_added + other.edges_added,
            edges_removed=self.edges_removed + other.edges_removed,
        )

    @property
    def is_empty(self) -> bool:
        return not (
            self.facts_added or self.facts_removed or self.edges_added or self.edges_removed
        )


class Morphism(BaseModel):
    """
    Transition from_patch → to_patch.

    Attributes:
        id: Identifiant du morphism
        from_patch: Id du patch source
        to_patch: Id du patch cible
        type: Type de transition
        timestamp: Date de calcul
        author: Auteur (défaut "system")
        reason: Motif libre
        operations: Opérations atomiques ordonnées
        delta: Compteurs
        information_gain: Score [0-1]
        chain: Composants ordonnés (uniquement si COMPOSITE)
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    from_patch: str
    to_patch: str
    type: MorphismType
    timestamp: datetime = Field(default_factory=utc_now)
    author: str = "system"
    reason: str = "Transition"
    operations: Tuple[Operation, ...] = ()
    delta: MorphismDelta = Field(default_factory=MorphismDelta)
    information_gain: float = 0.0
    chain: Optional[Tuple["Morphism", ...]] = None

    @property
    def is_identity(self) -> bool:
        """Diff vide : classé TRANSITION mais sans aucune opération."""
        return self.type != MorphismType.COMPOSITE and not self.operations

    def operations_of(self, kind: OperationKind) -> Tuple[Operation, ...]:
        return tuple(op for op in self.operations if op.op == kind)


Morphism.model_rebuild()
