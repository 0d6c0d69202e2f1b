from knowevo.config.engine_config import (
    ClusteringConfig,
    DeduplicationConfig,
    EngineConfig,
    EquivalenceConfig,
    ExtractionDefaults,
    InformationGainWeights,
    MotiveGraphConfig,
    engine_config_from_settings,
    load_engine_config,
)
from knowevo.config.settings import Settings, get_settings

__all__ = [
    "ClusteringConfig",
    "DeduplicationConfig",
    "EngineConfig",
    "EquivalenceConfig",
    "ExtractionDefaults",
    "InformationGainWeights",
    "MotiveGraphConfig",
    "engine_config_from_settings",
    "load_engine_config",
    "Settings",
    "get_settings",
]
