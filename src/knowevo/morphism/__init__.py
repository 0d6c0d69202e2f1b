"""
Moteur de morphisms : diff, classification, gain d'information,
équivalence observationnelle, voisinage de Yoneda et chaînage.
"""

from knowevo.morphism.chaining import chain_morphisms, compose_path, find_path
from knowevo.morphism.diff import (
    classify_operations,
    compute_delta,
    compute_morphism,
    diff_patches,
    edge_operations,
    fact_operations,
)
from knowevo.morphism.equivalence import (
    EquivalenceResult,
    ProbeKind,
    SemanticProbe,
    generate_probes,
    observational_equivalent,
)
from knowevo.morphism.information_gain import (
    InformationGainComponents,
    avg_confidence_change,
    compute_information_gain,
    information_gain_components,
)
from knowevo.morphism.neighborhood import (
    MorphismNeighborhood,
    StructuralSummary,
    morphism_neighborhood,
    yoneda_equivalent,
)

__all__ = [
    "chain_morphisms",
    "compose_path",
    "find_path",
    "classify_operations",
    "compute_delta",
    "compute_morphism",
    "diff_patches",
    "edge_operations",
    "fact_operations",
    "EquivalenceResult",
    "ProbeKind",
    "SemanticProbe",
    "generate_probes",
    "observational_equivalent",
    "InformationGainComponents",
    "avg_confidence_change",
    "compute_information_gain",
    "information_gain_components",
    "MorphismNeighborhood",
    "StructuralSummary",
    "morphism_neighborhood",
    "yoneda_equivalent",
]
