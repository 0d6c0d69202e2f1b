# src/knowevo/orchestrator.py
"""
Pipeline complet de traitement d'une source.

Étapes de process_source() :
1. Extraction des facts (FactExtractor) + normalisation
2. Construction du patch
3. Embeddings (si un Embedder est configuré)
4. Inférence des edges par topic
5. Recherche du dernier patch de la source
6. Stockage du patch
7. Morphism depuis le patch précédent (gain d'information inclus)
8. Extraction et stockage des motives

Les logs d'exécution vont dans pipeline.log (logger fichier lazy) en plus
du logger du module.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from knowevo.clustering.motive_extractor import extract_all_motives
from knowevo.clustering.motive_graph import build_motive_graph
from knowevo.common.logging import get_logger
from knowevo.config.engine_config import EngineConfig, engine_config_from_settings
from knowevo.ingestion.edge_inference import infer_topic_edges
from knowevo.ingestion.embedding_attacher import attach_embeddings
from knowevo.ingestion.fact_normalizer import normalize_extracted_facts
from knowevo.ingestion.interfaces import Embedder, FactExtractor
from knowevo.ingestion.transcript import TranscriptSegment, chunk_transcript
from knowevo.models.morphism import Morphism
from knowevo.models.motive import Motive
from knowevo.models.patch import Patch, make_patch
from knowevo.morphism.diff import compute_morphism
from knowevo.patches.serialization import write_atomic
from knowevo.persistence.store import PatchStore

logger = logging.getLogger(__name__)


@dataclass
class ProcessingResult:
    """Résultat du traitement d'une source."""

    source_id: str
    patch: Optional[Patch] = None
    morphism: Optional[Morphism] = None
    motives: List[Motive] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def patch_id(self) -> Optional[str]:
        return self.patch.id if self.patch is not None else None

    @property
    def success(self) -> bool:
        return self.error is None


class KnowledgeEvolutionPipeline:
    """
    Orchestrateur extraction → patch → morphism → motives.

    Toute la configuration est portée par l'instance (EngineConfig) ; sans
    config explicite, elle est lue une fois depuis l'environnement
    (KNOWEVO_ENGINE_CONFIG, SIMILARITY_WORKERS).
    """

    def __init__(
        self,
        extractor: FactExtractor,
        store: PatchStore,
        embedder: Optional[Embedder] = None,
        config: Optional[EngineConfig] = None,
        logs_dir: Optional[Path] = None,
    ):
        self.extractor = extractor
        self.store = store
        self.embedder = embedder
        self.config = config or engine_config_from_settings()
        self.run_logger = get_logger("pipeline.log", logs_dir=logs_dir)

    def build_patch(
        self,
        source_id: str,
        texts: Sequence[str],
        source: str = "manual",
        offsets: Optional[Sequence[float]] = None,
    ) -> Patch:
        """
        Étapes 1 à 4 : facts, patch, embeddings, edges.

        offsets[i] (si fourni) devient le timestamp_in_source des facts du
        texte i.
        """
        if offsets is not None and len(offsets) != len(texts):
            raise ValueError(f"{len(offsets)} offsets pour {len(texts)} textes")

        facts = []
        for index, text in enumerate(texts):
            triples = self.extractor.extract(text)
            extracted = normalize_extracted_facts(
                triples,
                defaults=self.config.extraction,
                extracted_from=f"{source_id}#{index}",
                timestamp_in_source=offsets[index] if offsets is not None else None,
            )
            self.run_logger.debug(
                f"[EVO:Pipeline] {source_id}#{index}: {len(extracted)} facts retenus"
            )
            facts.extend(extracted)

        patch = make_patch(
            facts,
            source=source,
            source_id=source_id,
            metadata={"num_texts": len(texts)},
        )

        if self.embedder is not None:
            patch = attach_embeddings(patch, self.embedder)
        else:
            self.run_logger.warning(
                f"[EVO:Pipeline] {source_id}: aucun embedder configuré, pas de motives possibles"
            )

        return infer_topic_edges(patch)

    def process_source(
        self,
        source_id: str,
        texts: Sequence[str],
        source: str = "manual",
        reason: Optional[str] = None,
        offsets: Optional[Sequence[float]] = None,
    ) -> ProcessingResult:
        """
        Traite un lot de textes d'une source et fait évoluer sa connaissance.

        Args:
            source_id: Identifiant de la source
            texts: Textes bruts (transcripts, documents...)
            source: Catégorie de la source
            reason: Motif du morphism (défaut: nombre de textes traités)
            offsets: Position de chaque texte dans la source (secondes)

        Returns:
            ProcessingResult (morphism None pour le premier patch d'une source)
        """
        self.run_logger.info(f"[EVO:Pipeline] Traitement source {source_id} ({len(texts)} textes)")

        patch = self.build_patch(source_id, texts, source=source, offsets=offsets)

        previous_id = self.store.latest_for_source(source_id)
        self.store.store_patch(patch)

        motives = extract_all_motives(patch, config=self.config.clustering)

        morphism = None
        if previous_id is not None and previous_id != patch.id:
            previous = self.store.retrieve_patch(previous_id)
            morphism = compute_morphism(
                previous,
                patch,
                reason=reason or f"Nouveaux textes traités: {len(texts)}",
                motives_from=self.store.motives_for_patch(previous_id),
                motives_to=motives,
                weights=self.config.information_gain,
            )
            self.store.store_morphism(morphism)

        for motive in motives:
            self.store.store_motive(motive, patch_id=patch.id)

        self.run_logger.info(
            f"[EVO:Pipeline] ✅ Source {source_id}: patch {patch.id} "
            f"({len(patch.facts)} facts, {len(patch.edges)} edges), "
            f"morphism {morphism.type.value if morphism else 'aucun'}, "
            f"{len(motives)} motives"
        )
        return ProcessingResult(source_id=source_id, patch=patch, morphism=morphism, motives=motives)

    def process_transcript(
        self,
        source_id: str,
        segments: Iterable[Union[TranscriptSegment, Mapping[str, Any]]],
        chunk_seconds: Optional[float] = None,
        source: str = "transcript",
        reason: Optional[str] = None,
    ) -> ProcessingResult:
        """
        Traite un transcript horodaté : un texte par chunk temporel.

        Les facts d'un chunk portent le début du chunk en timestamp_in_source.
        """
        chunk_seconds = chunk_seconds or self.config.extraction.chunk_seconds
        chunks = chunk_transcript(segments, chunk_seconds=chunk_seconds)
        self.run_logger.info(
            f"[EVO:Pipeline] Transcript {source_id}: {len(chunks)} chunks de {chunk_seconds}s"
        )
        return self.process_source(
            source_id,
            [chunk.text for chunk in chunks],
            source=source,
            reason=reason,
            offsets=[chunk.start for chunk in chunks],
        )

    def process_all_sources(
        self,
        sources: Mapping[str, Sequence[str]],
        max_workers: int = 1,
    ) -> List[ProcessingResult]:
        """
        Traite plusieurs sources ; l'échec d'une source n'arrête pas les autres.

        Returns:
            Un ProcessingResult par source, dans l'ordre de `sources`
        """
        def _run(item) -> ProcessingResult:
            source_id, texts = item
            try:
                return self.process_source(source_id, texts)
            except Exception as e:
                self.run_logger.error(f"[EVO:Pipeline] ❌ Échec source {source_id}: {e}")
                logger.exception(f"[EVO:Pipeline] Échec source {source_id}")
                return ProcessingResult(source_id=source_id, error=str(e))

        items = list(sources.items())
        if max_workers <= 1:
            return [_run(item) for item in items]

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(_run, items))


def export_for_visualization(
    store: PatchStore,
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    """
    Export JSON-compatible pour la visualisation.

    Returns:
        {"stats", "patches", "morphisms", "motives", "motive_graph"}
    """
    config = config or engine_config_from_settings()
    motives = store.all_motives()
    motive_graph = build_motive_graph(motives, config=config.motive_graph)

    return {
        "stats": store.stats(),
        "patches": [p.model_dump(mode="json") for p in store.all_patches()],
        "morphisms": [m.model_dump(mode="json") for m in store.all_morphisms()],
        "motives": [m.model_dump(mode="json") for m in motives],
        "motive_graph": motive_graph.model_dump(mode="json"),
    }


def save_visualization_data(
    store: PatchStore,
    output_path: Path,
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    data = export_for_visualization(store, config=config)
    write_atomic(Path(output_path), json.dumps(data, ensure_ascii=False, indent=2))
    logger.info(f"[EVO:Pipeline] Données de visualisation sauvegardées dans {output_path}")
    return data
