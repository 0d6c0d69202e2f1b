# src/knowevo/models/patch.py
"""
Modèle Patch - instantané immuable de connaissance.

Un Patch regroupe facts, edges et embeddings à un instant donné. Il n'est
jamais muté : toute transformation (ajout/retrait de fact, changement de
confiance, passage à un autre LOD) retourne un nouveau Patch
(voir knowevo.patches.transforms).
"""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from knowevo.models.embedding import Embedding
from knowevo.models.fact import Edge, Fact, new_id, utc_now


def freeze_metadata(metadata: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    """Copie en mapping lecture seule (MappingProxyType)."""
    return MappingProxyType(dict(metadata or {}))


class Patch(BaseModel):
    """
    Instantané de facts/edges/embeddings.

    Attributes:
        id: Identifiant du patch
        timestamp: Date de création (UTC)
        source: Catégorie de la source (ex: "youtube-channel", "manual")
        source_id: Identifiant de la source
        facts: Facts (ids uniques)
        edges: Edges (ids uniques, extrémités présentes dans facts)
        embeddings: Au plus un embedding par fact
        metadata: Métadonnées libres (mapping en lecture seule)
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    timestamp: datetime = Field(default_factory=utc_now)
    source: str = "manual"
    source_id: Optional[str] = None
    facts: Tuple[Fact, ...] = ()
    edges: Tuple[Edge, ...] = ()
    embeddings: Tuple[Embedding, ...] = ()
    metadata: Mapping[str, Any] = Field(default_factory=lambda: freeze_metadata(None))

    @field_validator("metadata", mode="before")
    @classmethod
    def _copy_metadata(cls, value: Any) -> Any:
        return dict(value) if isinstance(value, Mapping) else value

    @field_validator("metadata", mode="after")
    @classmethod
    def _freeze_metadata(cls, value: Mapping[str, Any]) -> Mapping[str, Any]:
        return freeze_metadata(value)

    @field_serializer("metadata")
    def _dump_metadata(self, value: Mapping[str, Any]) -> Dict[str, Any]:
        return dict(value)

    def __hash__(self) -> int:
        # metadata n'est pas hashable ; deux patches égaux ont le même id
        return hash((self.id, self.timestamp))

    def fact_index(self) -> Dict[str, Fact]:
        """Index id → Fact (le dernier gagne si ids dupliqués)."""
        return {f.id: f for f in self.facts}

    def edge_index(self) -> Dict[str, Edge]:
        return {e.id: e for e in self.edges}

    def embedding_index(self) -> Dict[str, Embedding]:
        """Index claim_ref → Embedding."""
        return {e.claim_ref: e for e in self.embeddings}

    @property
    def is_empty(self) -> bool:
        return not self.facts


def make_patch(
    facts: Sequence[Fact],
    edges: Sequence[Edge] = (),
    source: str = "manual",
    source_id: Optional[str] = None,
    embeddings: Sequence[Embedding] = (),
    metadata: Optional[Dict[str, Any]] = None,
    timestamp: Optional[datetime] = None,
) -> Patch:
    """Crée un Patch avec un id UUID et un timestamp courant (sauf si fourni)."""
    return Patch(
        timestamp=timestamp or utc_now(),
        source=source,
        source_id=source_id,
        facts=tuple(facts),
        edges=tuple(edges),
        embeddings=tuple(embeddings),
        metadata=freeze_metadata(metadata),
    )
