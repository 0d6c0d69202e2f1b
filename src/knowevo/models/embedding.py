"""Modèle Embedding - vecteur d'un Fact pour un modèle donné."""

from __future__ import annotations

from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

from knowevo.models.fact import new_id


class Embedding(BaseModel):
    """
    Vecteur d'embedding rattaché à un Fact.

    La longueur du vecteur est constante pour un même `model` ; au plus un
    embedding par Fact dans un Patch.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    claim_ref: str = Field(..., description="Id du Fact embarqué")
    model: str = Field(..., description="Nom/version du modèle d'embedding")
    vector: Tuple[float, ...]

    @property
    def dimension(self) -> int:
        return len(self.vector)
