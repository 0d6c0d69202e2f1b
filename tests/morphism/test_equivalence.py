"""
Tests de l'équivalence observationnelle (contrat déterministe).
"""

import pytest

from knowevo.config import EquivalenceConfig
from knowevo.morphism import ProbeKind, SemanticProbe, generate_probes, observational_equivalent


@pytest.fixture
def patch_pair(patch_factory, fact_factory, edge_factory):
    p1 = patch_factory(
        "p1",
        [fact_factory("f1", 0.9, "a"), fact_factory("f2", 0.6, "b"), fact_factory("f3", 0.4, "b")],
        edges=[edge_factory("e1", "f1", "f2")],
    )
    p2 = patch_factory(
        "p2",
        [fact_factory("f1", 0.9, "a"), fact_factory("f2", 0.75, "b"), fact_factory("f3", 0.4, "c")],
        edges=[edge_factory("e1", "f1", "f2")],
    )
    return p1, p2


class TestProbes:

    def test_generate_probes_deterministic(self):
        assert generate_probes(7, 200) == generate_probes(7, 200)
        assert generate_probes(7, 200) != generate_probes(8, 200)

    def test_confidence_thresholds_in_range(self):
        probes = generate_probes(42, 500)
        thresholds = [p.threshold for p in probes if p.kind == ProbeKind.CONFIDENCE]
        assert thresholds
        assert all(0.5 <= t <= 0.8 for t in thresholds)
        assert all(p.threshold is None for p in probes if p.kind != ProbeKind.CONFIDENCE)
        assert {p.kind for p in probes} == set(ProbeKind)

    def test_probe_evaluation(self, patch_pair):
        p1, _ = patch_pair
        assert SemanticProbe(ProbeKind.TOPICS).evaluate(p1) == 2
        assert SemanticProbe(ProbeKind.EDGES).evaluate(p1) == 1
        assert SemanticProbe(ProbeKind.CONFIDENCE, 0.6).evaluate(p1) == 2


class TestObservationalEquivalence:

    def test_identical_patches_are_equivalent(self, patch_pair):
        p1, _ = patch_pair
        result = observational_equivalent(p1, p1)
        assert result.equivalent
        assert result.pass_rate == 1.0
        assert result.tests_run == 1000

    def test_repeated_runs_give_same_pass_rate(self, patch_pair):
        p1, p2 = patch_pair
        first = observational_equivalent(p1, p2, num_tests=300, seed=3)
        second = observational_equivalent(p1, p2, num_tests=300, seed=3)
        assert first == second

    def test_different_patches_fail(self, patch_pair):
        p1, p2 = patch_pair
        result = observational_equivalent(p1, p2)
        # Les sondes "topics" divergent toujours (2 vs 3 topics)
        assert not result.equivalent
        assert result.pass_rate < 0.95

    def test_config_defaults(self, patch_pair):
        p1, p2 = patch_pair
        config = EquivalenceConfig(num_tests=50, confidence_threshold=0.0, seed=1)
        result = observational_equivalent(p1, p2, config=config)
        assert result.tests_run == 50
        assert result.seed == 1
        assert result.equivalent

    def test_invalid_num_tests(self, patch_pair):
        p1, p2 = patch_pair
        with pytest.raises(ValueError):
            observational_equivalent(p1, p2, num_tests=0)
