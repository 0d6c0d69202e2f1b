# src/knowevo/morphism/information_gain.py
"""
Gain d'information d'un morphism.

Somme pondérée clampée dans [0, 1] :
- nouveaux facts (0.3) : facts_added / |facts(from)|, ou facts_added / 10
  si from est vide, plafonné à 1
- confiance (0.3) : variation moyenne de confiance sur les facts communs,
  clampée dans [0, 1]
- motives (0.4) : (motives(to) - motives(from)) / 5, clampé dans [0, 1] ;
  0 si les comptes ne sont pas fournis
- pénalité de réorganisation (-0.1) : si aucun fact ajouté mais des edges
  ajoutés, poids × min(1, edges_added / 10)

Les poids viennent d'InformationGainWeights.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from knowevo.config.engine_config import InformationGainWeights
from knowevo.models.morphism import MorphismDelta
from knowevo.models.patch import Patch

EMPTY_SOURCE_NORMALIZER = 10.0
MOTIVES_NORMALIZER = 5.0
REORG_NORMALIZER = 10.0


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class InformationGainComponents:
    """Détail des composantes (scores avant pondération, pénalité pondérée)."""

    new_facts_score: float
    confidence_score: float
    motives_score: float
    reorg_penalty: float
    total: float


def avg_confidence_change(from_patch: Patch, to_patch: Patch) -> float:
    """Moyenne (signée) de new - old sur les facts communs ; 0.0 sans fact commun."""
    old = from_patch.fact_index()
    new = to_patch.fact_index()
    common = [fid for fid in old if fid in new]
    if not common:
        return 0.0
    return sum(new[fid].confidence - old[fid].confidence for fid in common) / len(common)


def information_gain_components(
    delta: MorphismDelta,
    from_patch: Patch,
    to_patch: Patch,
    motive_count_from: Optional[int] = None,
    motive_count_to: Optional[int] = None,
    weights: Optional[InformationGainWeights] = None,
) -> InformationGainComponents:
    weights = weights or InformationGainWeights()

    num_facts_from = len(from_patch.facts)
    if num_facts_from > 0:
        new_facts_score = min(1.0, delta.facts_added / max(num_facts_from, 1))
    else:
        new_facts_score = min(1.0, delta.facts_added / EMPTY_SOURCE_NORMALIZER)

    confidence_score = _clamp(avg_confidence_change(from_patch, to_patch))

    if motive_count_from is not None and motive_count_to is not None:
        motives_score = _clamp((motive_count_to - motive_count_from) / MOTIVES_NORMALIZER)
    else:
        motives_score = 0.0

    if delta.facts_added == 0 and delta.edges_added > 0:
        reorg_penalty = weights.reorganization * _clamp(delta.edges_added / REORG_NORMALIZER)
    else:
        reorg_penalty = 0.0

    total = _clamp(
        weights.new_facts * new_facts_score
        + weights.confidence * confidence_score
        + weights.motives * motives_score
        + reorg_penalty
    )
    return InformationGainComponents(
        new_facts_score=new_facts_score,
        confidence_score=confidence_score,
        motives_score=motives_score,
        reorg_penalty=reorg_penalty,
        total=total,
    )


def compute_information_gain(
    delta: MorphismDelta,
    from_patch: Patch,
    to_patch: Patch,
    motive_count_from: Optional[int] = None,
    motive_count_to: Optional[int] = None,
    weights: Optional[InformationGainWeights] = None,
) -> float:
    """Gain d'information dans [0, 1]."""
    return information_gain_components(
        delta,
        from_patch,
        to_patch,
        motive_count_from=motive_count_from,
        motive_count_to=motive_count_to,
        weights=weights,
    ).total
