# src/knowevo/ingestion/fact_normalizer.py
"""
Normalisation des triplets renvoyés par le service d'extraction.

Le service peut renvoyer des données clairsemées. Plutôt que d'échouer,
on substitue les valeurs par défaut documentées :
- confidence absente, non numérique ou hors [0, 1] → 0.5
- topic absent ou vide → "general"

Un triplet sans texte exploitable est ignoré (rien à affirmer). Un seuil
min_confidence optionnel écarte les facts trop incertains, après
substitution des valeurs par défaut.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Iterable, List, Mapping, Optional

from knowevo.config.engine_config import ExtractionDefaults
from knowevo.models.fact import Fact, make_fact

logger = logging.getLogger(__name__)


def _normalize_confidence(value: Any, default: float) -> float:
    if isinstance(value, bool) or value is None:
        return default
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(confidence) or not 0.0 <= confidence <= 1.0:
        return default
    return confidence


def _normalize_topic(value: Any, default: str) -> str:
    if value is None:
        return default
    topic = str(value).strip()
    return topic or default


def normalize_extracted_facts(
    triples: Iterable[Mapping[str, Any]],
    defaults: Optional[ExtractionDefaults] = None,
    extracted_from: Optional[str] = None,
    timestamp_in_source: Optional[float] = None,
    min_confidence: Optional[float] = None,
) -> List[Fact]:
    """
    Convertit les triplets {text, confidence, topic} en Facts.

    Args:
        triples: Sortie brute du FactExtractor
        defaults: Valeurs de substitution
        extracted_from: Localisateur de source reporté sur chaque Fact
        timestamp_in_source: Position (secondes) reportée sur chaque Fact
        min_confidence: Seuil inclusif (défaut: defaults.min_confidence,
            None = aucun filtre)

    Returns:
        Facts dans l'ordre des triplets
    """
    defaults = defaults or ExtractionDefaults()
    if min_confidence is None:
        min_confidence = defaults.min_confidence

    facts = []
    substituted = 0
    skipped = 0
    filtered = 0
    for triple in triples:
        text = str(triple.get("text") or "").strip()
        if not text:
            skipped += 1
            continue

        raw_confidence = triple.get("confidence")
        raw_topic = triple.get("topic")
        confidence = _normalize_confidence(raw_confidence, defaults.default_confidence)
        topic = _normalize_topic(raw_topic, defaults.default_topic)
        if confidence != raw_confidence or topic != raw_topic:
            substituted += 1
        if min_confidence is not None and confidence < min_confidence:
            filtered += 1
            continue

        facts.append(make_fact(
            text=text,
            confidence=confidence,
            topic=topic,
            extracted_from=extracted_from,
            timestamp_in_source=timestamp_in_source,
        ))

    if skipped:
        logger.warning(f"[EVO:Extraction] {skipped} triplets sans texte ignorés")
    logger.debug(
        f"[EVO:Extraction] {len(facts)} facts normalisés ({substituted} avec valeurs par défaut, "
        f"{filtered} sous le seuil de confiance)"
    )
    return facts
