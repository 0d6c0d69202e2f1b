# src/knowevo/models/fact.py
"""
Modèles Fact et Edge - les deux briques d'un Patch.

Un Fact est une assertion atomique scorée. Il n'est jamais modifié en
place : "mettre à jour la confiance" produit un nouveau Patch contenant
un Fact de remplacement avec le MÊME id. Les ids de Facts sont stables
d'un patch à l'autre, c'est ce qui rend le diff significatif.

Les bornes (confiance, force, LOD) ne sont PAS imposées à la construction :
elles sont vérifiées par validate_patch(), qui rapporte toutes les
violations d'un coup sans rien réparer.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class EdgeRelation(str, Enum):
    """Types de relation entre deux Facts."""

    SUPPORTS = "supports"
    CONTRADICTS = "contradicts"
    REVISES = "revises"
    REFINES = "refines"
    GENERALIZES = "generalizes"
    SPECIALIZES = "specializes"
    CAUSES = "causes"
    CORRELATES = "correlates"


class Fact(BaseModel):
    """
    Assertion (claim) extraite d'une source.

    Attributes:
        id: Identifiant unique dans le patch, stable entre patches
        text: Formulation de l'assertion
        confidence: Score de confiance [0-1]
        topic: Catégorie libre (optionnelle)
        valid_from: Début de validité
        extracted_from: Localisateur de la source
        timestamp_in_source: Position dans la source (secondes, page...)
        revises: Id d'un fact antérieur que celui-ci révise
        tags: Étiquettes libres
        lod: Niveau de détail 0-3 (0 = le plus détaillé)
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    text: str
    confidence: float
    topic: Optional[str] = None
    valid_from: datetime = Field(default_factory=utc_now)
    extracted_from: Optional[str] = None
    timestamp_in_source: Optional[float] = None
    revises: Optional[str] = None
    tags: FrozenSet[str] = Field(default_factory=frozenset)
    lod: int = 0


class Edge(BaseModel):
    """
    Relation typée et pondérée entre deux Facts du même Patch.

    Les edges sont remplacés par id, jamais patchés en place : le diff ne
    connaît que add-edge / remove-edge.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    from_id: str = Field(..., description="Fact source")
    to_id: str = Field(..., description="Fact cible")
    relation: EdgeRelation
    strength: float


def make_fact(
    text: str,
    confidence: float,
    topic: Optional[str] = None,
    extracted_from: Optional[str] = None,
    timestamp_in_source: Optional[float] = None,
    tags: Optional[FrozenSet[str]] = None,
    lod: int = 0,
    revises: Optional[str] = None,
) -> Fact:
    """Crée un Fact avec un id UUID et valid_from = maintenant (UTC)."""
    return Fact(
        text=text,
        confidence=confidence,
        topic=topic,
        extracted_from=extracted_from,
        timestamp_in_source=timestamp_in_source,
        tags=frozenset(tags or ()),
        lod=lod,
        revises=revises,
    )


def make_edge(
    from_id: str,
    to_id: str,
    relation: EdgeRelation | str,
    strength: float,
) -> Edge:
    return Edge(
        from_id=from_id,
        to_id=to_id,
        relation=EdgeRelation(relation),
        strength=strength,
    )
