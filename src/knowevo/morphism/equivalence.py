# src/knowevo/morphism/equivalence.py
"""
Équivalence observationnelle entre deux patches.

N sondes sémantiques pseudo-aléatoires sont générées à partir d'une seed.
Chaque sonde est exécutée sur les deux patches ; ils sont équivalents si la
fraction de sondes donnant le même résultat atteint le seuil.

Types de sonde (tirés par sonde) :
- TOPICS     : nombre de topics distincts
- CONFIDENCE : nombre de facts avec confidence >= seuil ~ U[0.5, 0.8]
- EDGES      : nombre d'edges

Le seuil d'une sonde CONFIDENCE est tiré UNE fois et appliqué aux deux
patches. Même seed + N + seuil → même pass_rate (contrat testable, pas
une estimation statistique).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from knowevo.config.engine_config import EquivalenceConfig
from knowevo.models.patch import Patch
from knowevo.patches.queries import get_facts_by_confidence

CONFIDENCE_PROBE_LOW = 0.5
CONFIDENCE_PROBE_SPAN = 0.3


class ProbeKind(str, Enum):
    TOPICS = "topics"
    CONFIDENCE = "confidence"
    EDGES = "edges"


_PROBE_KINDS = (ProbeKind.TOPICS, ProbeKind.CONFIDENCE, ProbeKind.EDGES)


@dataclass(frozen=True)
class SemanticProbe:
    kind: ProbeKind
    threshold: Optional[float] = None

    def evaluate(self, patch: Patch) -> int:
        if self.kind == ProbeKind.TOPICS:
            return len({f.topic for f in patch.facts})
        if self.kind == ProbeKind.CONFIDENCE:
            return len(get_facts_by_confidence(patch, self.threshold))
        return len(patch.edges)


@dataclass(frozen=True)
class EquivalenceResult:
    equivalent: bool
    pass_rate: float
    tests_run: int
    confidence_threshold: float
    seed: int


def generate_probes(seed: int, num_tests: int) -> List[SemanticProbe]:
    """Génère num_tests sondes de façon déterministe (numpy Generator PCG64)."""
    rng = np.random.default_rng(seed)
    probes = []
    for _ in range(num_tests):
        kind = _PROBE_KINDS[int(rng.integers(0, len(_PROBE_KINDS)))]
        threshold = None
        if kind == ProbeKind.CONFIDENCE:
            threshold = CONFIDENCE_PROBE_LOW + CONFIDENCE_PROBE_SPAN * float(rng.random())
        probes.append(SemanticProbe(kind=kind, threshold=threshold))
    return probes


def observational_equivalent(
    patch1: Patch,
    patch2: Patch,
    num_tests: Optional[int] = None,
    confidence_threshold: Optional[float] = None,
    seed: Optional[int] = None,
    config: Optional[EquivalenceConfig] = None,
) -> EquivalenceResult:
    """
    Teste l'équivalence observationnelle de deux patches.

    Args:
        patch1, patch2: Patches à comparer
        num_tests: Nombre de sondes (défaut 1000)
        confidence_threshold: Taux de réussite requis (défaut 0.95)
        seed: Graine (défaut 42)
        config: EquivalenceConfig fournissant les défauts

    Raises:
        ValueError: si num_tests < 1
    """
    config = config or EquivalenceConfig()
    num_tests = config.num_tests if num_tests is None else num_tests
    confidence_threshold = (
        config.confidence_threshold if confidence_threshold is None else confidence_threshold
    )
    seed = config.seed if seed is None else seed

    if num_tests < 1:
        raise ValueError(f"num_tests doit être >= 1 (reçu {num_tests})")

    probes = generate_probes(seed, num_tests)
    passed = sum(1 for probe in probes if probe.evaluate(patch1) == probe.evaluate(patch2))
    pass_rate = passed / num_tests

    return EquivalenceResult(
        equivalent=pass_rate >= confidence_threshold,
        pass_rate=pass_rate,
        tests_run=num_tests,
        confidence_threshold=confidence_threshold,
        seed=seed,
    )
