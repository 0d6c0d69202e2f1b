"""
Tests du voisinage de Yoneda.
"""

from knowevo.models import Morphism, MorphismType
from knowevo.morphism import morphism_neighborhood, yoneda_equivalent


def _morphism(from_id, to_id):
    return Morphism(from_patch=from_id, to_patch=to_id, type=MorphismType.TRANSITION)


class TestMorphismNeighborhood:

    def test_predecessors_successors(self, patch_factory, fact_factory):
        patch = patch_factory("p2", [fact_factory("f1", 0.5, "a"), fact_factory("f2", 0.7, "a")])
        morphisms = [_morphism("p3", "p2"), _morphism("p1", "p2"), _morphism("p2", "p4")]
        neighborhood = morphism_neighborhood(patch, morphisms)
        assert neighborhood.predecessors == ("p1", "p3")
        assert neighborhood.successors == ("p4",)
        assert neighborhood.structural.num_facts == 2
        assert neighborhood.structural.avg_confidence == 0.6
        assert neighborhood.structural.topics == {"a": 2}

    def test_semantic_queries(self, patch_factory, fact_factory):
        patch = patch_factory("p1", [fact_factory("f1", 0.9)])
        queries = {"count": lambda p: len(p.facts), "max_conf": lambda p: max(f.confidence for f in p.facts)}
        neighborhood = morphism_neighborhood(patch, [], queries)
        assert neighborhood.semantic_responses == {"count": 1, "max_conf": 0.9}


class TestYonedaEquivalence:

    def test_same_shape_is_equivalent(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1", 0.5, "a")])
        p2 = patch_factory("p2", [fact_factory("g1", 0.5, "a")])
        morphisms = [_morphism("p0", "p1"), _morphism("p0", "p2")]
        assert yoneda_equivalent(p1, p2, morphisms)

    def test_different_neighbors(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1", 0.5, "a")])
        p2 = patch_factory("p2", [fact_factory("g1", 0.5, "a")])
        assert not yoneda_equivalent(p1, p2, [_morphism("p0", "p1")])

    def test_different_structure(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1", 0.5, "a")])
        p2 = patch_factory("p2", [fact_factory("g1", 0.6, "a")])
        assert not yoneda_equivalent(p1, p2)

    def test_queries_discriminate(self, patch_factory, fact_factory):
        p1 = patch_factory("p1", [fact_factory("f1", 0.5, "a", text="alpha")])
        p2 = patch_factory("p2", [fact_factory("g1", 0.5, "a", text="beta")])
        assert yoneda_equivalent(p1, p2)
        queries = {"texts": lambda p: sorted(f.text for f in p.facts)}
        assert not yoneda_equivalent(p1, p2, semantic_queries=queries)
