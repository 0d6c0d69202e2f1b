"""
Exceptions du moteur knowevo.

Seules les erreurs d'appelant remontent en exception. Les cas "vides"
(pas d'embeddings, pas de chemin, vecteurs incompatibles) sont des
résultats normaux et ne lèvent rien.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from knowevo.models.validation import ValidationReport


class KnowEvoError(Exception):
    """Erreur de base du package."""


class EmbeddingDimensionError(KnowEvoError):
    """Vecteurs de longueurs différentes dans un même batch d'embeddings."""

    def __init__(self, model: str, expected: int, got: int, claim_ref: str):
        self.model = model
        self.expected = expected
        self.got = got
        self.claim_ref = claim_ref
        super().__init__(
            f"Embedding '{model}' pour {claim_ref}: dimension {got}, attendu {expected}"
        )


class PatchNotFoundError(KnowEvoError):
    """Patch absent du store."""

    def __init__(self, patch_id: str):
        self.patch_id = patch_id
        super().__init__(f"Patch introuvable: {patch_id}")


class InvalidPatchError(KnowEvoError):
    """Patch refusé par un store car il viole des invariants structurels."""

    def __init__(self, patch_id: str, report: "ValidationReport"):
        self.patch_id = patch_id
        self.report = report
        codes = sorted({v.code for v in report.violations})
        super().__init__(
            f"Patch {patch_id} invalide ({len(report.violations)} violations: {', '.join(codes)})"
        )
