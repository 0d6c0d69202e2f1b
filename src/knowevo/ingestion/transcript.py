"""
Découpage d'un transcript horodaté en chunks temporels.

Chaque segment {timestamp, text} tombe dans le chunk floor(timestamp / durée).
Les chunks vides ne sont pas produits ; le début d'un chunk (index * durée)
devient le timestamp_in_source des facts qui en sont extraits.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class TranscriptSegment(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: float = Field(..., ge=0.0, description="Début du segment (secondes)")
    text: str


class TranscriptChunk(BaseModel):
    """
    Groupe de segments consécutifs dans le temps.

    Attributes:
        index: Numéro du créneau temporel (floor(timestamp / durée))
        start: Début du créneau en secondes
        segments: Segments du créneau, dans l'ordre d'arrivée
    """

    model_config = ConfigDict(frozen=True)

    index: int
    start: float
    segments: Tuple[TranscriptSegment, ...]

    @property
    def text(self) -> str:
        return " ".join(s.text.strip() for s in self.segments if s.text.strip())


def chunk_transcript(
    segments: Iterable[Union[TranscriptSegment, Mapping[str, Any]]],
    chunk_seconds: float = 600.0,
) -> List[TranscriptChunk]:
    """
    Regroupe les segments par créneaux de chunk_seconds secondes.

    Returns:
        Chunks triés par index

    Raises:
        ValueError: si chunk_seconds <= 0
        pydantic.ValidationError: si un segment est malformé
    """
    if chunk_seconds <= 0:
        raise ValueError(f"chunk_seconds doit être > 0 (reçu {chunk_seconds})")

    buckets: Dict[int, List[TranscriptSegment]] = {}
    for segment in segments:
        if not isinstance(segment, TranscriptSegment):
            segment = TranscriptSegment.model_validate(segment)
        buckets.setdefault(int(segment.timestamp // chunk_seconds), []).append(segment)

    chunks = [
        TranscriptChunk(index=index, start=index * chunk_seconds, segments=tuple(buckets[index]))
        for index in sorted(buckets)
    ]
    logger.debug(
        f"[EVO:Transcript] {sum(len(c.segments) for c in chunks)} segments → "
        f"{len(chunks)} chunks de {chunk_seconds}s"
    )
    return chunks
