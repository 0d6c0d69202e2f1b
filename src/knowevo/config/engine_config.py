"""
Configuration explicite du moteur diff & clustering.

Aucun état global : chaque point d'entrée reçoit l'objet de config
(ou en construit un par défaut à l'appel). Le YAML n'est qu'une source
possible pour ces objets.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)


class ClusteringConfig(BaseModel):
    """Clustering par similarité cosine + extraction de motives."""

    model_config = ConfigDict(frozen=True)

    similarity_threshold: float = Field(default=0.75, ge=-1.0, le=1.0)
    concept_words_count: int = Field(default=5, ge=0)
    # Parallélisme du calcul pairwise (1 = séquentiel)
    max_workers: int = Field(default=1, ge=1)
    # En-dessous, le découpage en tâches coûte plus qu'il ne rapporte
    min_pairs_per_worker: int = Field(default=2000, ge=1)


class MotiveGraphConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold: float = Field(default=0.6, ge=-1.0, le=1.0)


class InformationGainWeights(BaseModel):
    """Pondérations du gain d'information (somme clampée dans [0, 1])."""

    model_config = ConfigDict(frozen=True)

    new_facts: float = 0.3
    confidence: float = 0.3
    motives: float = 0.4
    reorganization: float = -0.1


class EquivalenceConfig(BaseModel):
    """Équivalence observationnelle par sondes pseudo-aléatoires."""

    model_config = ConfigDict(frozen=True)

    num_tests: int = Field(default=1000, ge=1)
    confidence_threshold: float = Field(default=0.95, ge=0.0, le=1.0)
    seed: int = 42


class DeduplicationConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    similarity_threshold: float = Field(default=0.92, ge=-1.0, le=1.0)


class ExtractionDefaults(BaseModel):
    """Valeurs substituées aux triplets incomplets du service d'extraction."""

    model_config = ConfigDict(frozen=True)

    default_confidence: float = Field(default=0.5, ge=0.0, le=1.0)
    default_topic: str = "general"
    # Facts sous ce seuil écartés (None = aucun filtre)
    min_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    # Durée d'un chunk de transcript (secondes)
    chunk_seconds: float = Field(default=600.0, gt=0.0)


class EngineConfig(BaseModel):
    """Configuration complète du moteur."""

    model_config = ConfigDict(frozen=True)

    clustering: ClusteringConfig = Field(default_factory=ClusteringConfig)
    motive_graph: MotiveGraphConfig = Field(default_factory=MotiveGraphConfig)
    information_gain: InformationGainWeights = Field(default_factory=InformationGainWeights)
    equivalence: EquivalenceConfig = Field(default_factory=EquivalenceConfig)
    deduplication: DeduplicationConfig = Field(default_factory=DeduplicationConfig)
    extraction: ExtractionDefaults = Field(default_factory=ExtractionDefaults)


def load_engine_config(config_path: Optional[Path] = None) -> EngineConfig:
    """
    Charge la configuration moteur depuis un fichier YAML.

    Le YAML reprend les sections d'EngineConfig (clustering, motive_graph,
    information_gain, equivalence, deduplication, extraction). Les sections
    absentes gardent leurs valeurs par défaut.

    Args:
        config_path: Chemin du YAML. None ou fichier absent → défauts.

    Returns:
        EngineConfig

    Raises:
        ValueError: Si le fichier existe mais n'est pas une config valide
    """
    if config_path is None:
        return EngineConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        logger.warning(
            f"[EVO:Config] Fichier de configuration non trouvé: {config_path}. "
            "Utilisation configuration par défaut."
        )
        return EngineConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"YAML invalide dans {config_path}: {e}") from e

    if not isinstance(yaml_data, dict):
        raise ValueError(f"{config_path}: un mapping YAML est attendu à la racine")

    # Tolère une enveloppe "engine:" autour des sections
    if "engine" in yaml_data and isinstance(yaml_data["engine"], dict):
        yaml_data = yaml_data["engine"]

    try:
        config = EngineConfig(**yaml_data)
    except ValidationError as e:
        raise ValueError(f"Configuration moteur invalide dans {config_path}: {e}") from e

    logger.info(f"[EVO:Config] Configuration chargée depuis {config_path}")
    return config


def engine_config_from_settings() -> EngineConfig:
    """
    Configuration moteur par défaut d'un processus.

    YAML désigné par KNOWEVO_ENGINE_CONFIG (défauts s'il n'est pas fourni),
    puis SIMILARITY_WORKERS, s'il est défini, remplace clustering.max_workers.
    """
    from knowevo.config.settings import get_settings

    settings = get_settings()
    config = load_engine_config(settings.engine_config_path)

    if settings.similarity_workers is not None:
        clustering = config.clustering.model_copy(
            update={"max_workers": settings.similarity_workers}
        )
        config = config.model_copy(update={"clustering": clustering})
    return config
