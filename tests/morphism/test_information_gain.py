"""
Tests du gain d'information.
"""

import pytest

from knowevo.config import InformationGainWeights
from knowevo.models import MorphismDelta
from knowevo.morphism import (
    avg_confidence_change,
    compute_information_gain,
    compute_morphism,
    information_gain_components,
)


class TestComponents:

    def test_new_facts_relative_to_source(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1"), fact_factory("f2")])
        p2 = patch_factory("p2", [fact_factory("f1"), fact_factory("f2"), fact_factory("f3")])
        components = information_gain_components(MorphismDelta(facts_added=1), p1, p2)
        assert components.new_facts_score == pytest.approx(0.5)
        assert components.total == pytest.approx(0.15)

    def test_new_facts_from_empty_source(self, patch_factory, fact_factory):
        p1 = patch_factory("p1")
        p2 = patch_factory("p2", [fact_factory(f"f{i}") for i in range(4)])
        components = information_gain_components(MorphismDelta(facts_added=4), p1, p2)
        assert components.new_facts_score == pytest.approx(0.4)

    def test_new_facts_capped(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f0")])
        p2 = patch_factory("p2", [fact_factory(f"f{i}") for i in range(5)])
        components = information_gain_components(MorphismDelta(facts_added=4), p1, p2)
        assert components.new_facts_score == 1.0

    def test_scenario_c_confidence_score(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1", 0.6)])
        p2 = patch_factory("p2", [fact_factory("f1", 0.9)])
        components = information_gain_components(MorphismDelta(), p1, p2)
        assert components.confidence_score == pytest.approx(0.3)
        assert components.total == pytest.approx(0.09)

    def test_negative_confidence_change_clamped(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1", 0.9)])
        p2 = patch_factory("p2", [fact_factory("f1", 0.2)])
        assert avg_confidence_change(p1, p2) == pytest.approx(-0.7)
        assert information_gain_components(MorphismDelta(), p1, p2).confidence_score == 0.0

    def test_motives_score(self, patch_factory):
        p1, p2 = patch_factory("p1"), patch_factory("p2")
        with_counts = information_gain_components(
            MorphismDelta(), p1, p2, motive_count_from=1, motive_count_to=3
        )
        assert with_counts.motives_score == pytest.approx(0.4)
        without_counts = information_gain_components(MorphismDelta(), p1, p2)
        assert without_counts.motives_score == 0.0

    def test_reorganization_penalty(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1")])
        p2 = patch_factory("p2", [fact_factory("f1")])
        components = information_gain_components(MorphismDelta(edges_added=5), p1, p2)
        assert components.reorg_penalty == pytest.approx(-0.05)
        assert components.total == 0.0

    def test_custom_weights(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1", 0.5)])
        p2 = patch_factory("p2", [fact_factory("f1", 1.0)])
        weights = InformationGainWeights(new_facts=0.0, confidence=1.0, motives=0.0)
        assert compute_information_gain(MorphismDelta(), p1, p2, weights=weights) == pytest.approx(0.5)


class TestBounds:

    @pytest.mark.parametrize("delta", [
        MorphismDelta(facts_added=1000),
        MorphismDelta(edges_added=1000),
        MorphismDelta(facts_added=3, facts_removed=7, edges_added=2, edges_removed=9),
        MorphismDelta(),
    ])
    @pytest.mark.parametrize("motives", [(None, None), (0, 50), (50, 0)])
    def test_gain_in_unit_interval(self, patch_factory, fact_factory, delta, motives):
        p1 = patch_factory("p1", [fact_factory("f1", 0.0), fact_factory("f2", 1.0)])
        p2 = patch_factory("p2", [fact_factory("f1", 1.0), fact_factory("f2", 0.0)])
        gain = compute_information_gain(
            delta, p1, p2, motive_count_from=motives[0], motive_count_to=motives[1]
        )
        assert 0.0 <= gain <= 1.0

    def test_compute_morphism_uses_motive_counts(self, patch_factory, fact_factory,
                                                 clustered_patch):
        from knowevo.clustering import extract_all_motives

        p0 = patch_factory("p0", list(clustered_patch.facts))
        motives = extract_all_motives(clustered_patch)
        morphism = compute_morphism(p0, clustered_patch, motives_from=[], motives_to=motives)
        assert morphism.information_gain == pytest.approx(0.4 * 0.2)
