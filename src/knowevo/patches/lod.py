"""
Niveaux de détail (LOD) des facts.

0 = texte intégral, 1 = deux premières phrases, 2 = première phrase,
3 = cinq premiers mots. Approximation purement lexicale : aucun modèle
de résumé n'est appelé ici.
"""

from __future__ import annotations

from knowevo.models.fact import Fact
from knowevo.models.patch import Patch

LOD_LEVELS = (0, 1, 2, 3)


def summarize_text(text: str, target_lod: int) -> str:
    if target_lod not in LOD_LEVELS:
        raise ValueError(f"LOD inconnu: {target_lod} (attendu 0-3)")
    if target_lod == 0:
        return text

    sentences = [s.strip() for s in text.split(".")]
    sentences = [s for s in sentences if s]
    if target_lod == 1:
        return " ".join(sentences[:2])
    if target_lod == 2:
        return sentences[0] if sentences else ""
    return " ".join(text.split()[:5])


def create_lod_version(fact: Fact, target_lod: int) -> Fact:
    """Copie du fact (même id) résumée au niveau demandé."""
    return fact.model_copy(update={
        "text": summarize_text(fact.text, target_lod),
        "lod": target_lod,
    })


def patch_at_lod(patch: Patch, target_lod: int) -> Patch:
    return patch.model_copy(update={
        "facts": tuple(create_lod_version(f, target_lod) for f in patch.facts),
    })
