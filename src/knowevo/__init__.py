"""
knowevo - moteur de diff et de clustering de connaissances versionnées.

Patches immuables de facts/edges/embeddings, morphisms calculés entre
patches, motives dérivés par clustering des embeddings.
"""

from knowevo.clustering import (
    build_motive_graph,
    cluster_by_similarity,
    extract_all_motives,
    find_duplicates,
    merge_duplicates,
)
from knowevo.config import EngineConfig, get_settings, load_engine_config
from knowevo.models import (
    Edge,
    EdgeRelation,
    Embedding,
    Fact,
    Morphism,
    MorphismType,
    Motive,
    Patch,
    make_edge,
    make_fact,
    make_patch,
    validate_patch,
)
from knowevo.morphism import (
    chain_morphisms,
    compute_information_gain,
    compute_morphism,
    find_path,
    morphism_neighborhood,
    observational_equivalent,
    yoneda_equivalent,
)
from knowevo.orchestrator import (
    KnowledgeEvolutionPipeline,
    ProcessingResult,
    export_for_visualization,
)
from knowevo.semantic import centroid, cosine_similarity, euclidean_distance

__version__ = "0.1.0"

__all__ = [
    "build_motive_graph",
    "cluster_by_similarity",
    "extract_all_motives",
    "find_duplicates",
    "merge_duplicates",
    "EngineConfig",
    "get_settings",
    "load_engine_config",
    "Edge",
    "EdgeRelation",
    "Embedding",
    "Fact",
    "Morphism",
    "MorphismType",
    "Motive",
    "Patch",
    "make_edge",
    "make_fact",
    "make_patch",
    "validate_patch",
    "chain_morphisms",
    "compute_information_gain",
    "compute_morphism",
    "find_path",
    "morphism_neighborhood",
    "observational_equivalent",
    "yoneda_equivalent",
    "KnowledgeEvolutionPipeline",
    "ProcessingResult",
    "export_for_visualization",
    "centroid",
    "cosine_similarity",
    "euclidean_distance",
]
