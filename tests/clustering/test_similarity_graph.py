"""
Tests du graphe de similarité et du clustering par composantes connexes.
"""

import itertools
import logging

import pytest

from knowevo.clustering import build_similarity_graph, cluster_by_similarity, connected_components
from knowevo.clustering.similarity_graph import SimilarityEdge, SimilarityGraph, _row_chunks
from knowevo.config import ClusteringConfig


class TestBuildSimilarityGraph:

    def test_edges_above_threshold(self, clustered_patch):
        graph = build_similarity_graph(clustered_patch.embeddings, 0.75)
        assert graph.nodes == frozenset({"f1", "f2", "f3"})
        assert [(e.source, e.target) for e in graph.edges] == [("f1", "f2")]
        assert graph.edges[0].weight == pytest.approx(0.9 / (0.9 ** 2 + 0.3 ** 2) ** 0.5)

    def test_threshold_is_inclusive(self, embedding_factory):
        embeddings = [embedding_factory("a", [1.0, 0.0]), embedding_factory("b", [1.0, 0.0])]
        graph = build_similarity_graph(embeddings, 1.0)
        assert len(graph.edges) == 1

    def test_mismatched_lengths_are_not_similar(self, embedding_factory):
        embeddings = [embedding_factory("a", [1.0, 0.0]), embedding_factory("b", [1.0, 0.0, 0.0])]
        graph = build_similarity_graph(embeddings, -1.0)
        assert graph.edges == ()

    def test_threaded_matches_sequential(self, embedding_factory):
        embeddings = [
            embedding_factory(f"f{i}", [1.0, (i % 5) * 0.1, (i % 3) * 0.2])
            for i in range(40)
        ]
        sequential = build_similarity_graph(embeddings, 0.95)
        threaded = build_similarity_graph(embeddings, 0.95, max_workers=4, min_pairs_per_worker=10)
        assert threaded == sequential

    def test_row_chunks_cover_all_rows(self):
        chunks = _row_chunks(50, 4)
        rows = [i for chunk in chunks for i in chunk]
        assert rows == list(range(50))
        assert len(chunks) <= 4


class TestConnectedComponents:

    def test_components_are_maximal(self):
        graph = SimilarityGraph(
            nodes=frozenset({"a", "b", "c", "d", "e"}),
            edges=(
                SimilarityEdge("a", "b", 0.9),
                SimilarityEdge("b", "c", 0.8),
                SimilarityEdge("d", "e", 0.85),
            ),
        )
        components = connected_components(graph)
        assert set(components) == {frozenset({"a", "b", "c"}), frozenset({"d", "e"})}

    def test_isolated_nodes_are_singletons(self):
        graph = SimilarityGraph(nodes=frozenset({"x", "y"}), edges=())
        assert connected_components(graph) == [frozenset({"x"}), frozenset({"y"})]


class TestClusterBySimilarity:

    def test_scenario_d_single_cluster(self, clustered_patch):
        """f1/f2 proches, f3 dissimilaire : un seul cluster {f1, f2}."""
        clusters = cluster_by_similarity(clustered_patch, 0.75)
        assert clusters == [frozenset({"f1", "f2"})]

    def test_default_threshold_from_config(self, clustered_patch):
        assert cluster_by_similarity(clustered_patch) == [frozenset({"f1", "f2"})]
        strict = ClusteringConfig(similarity_threshold=0.99)
        assert cluster_by_similarity(clustered_patch, config=strict) == []

    def test_no_embeddings_warns(self, patch_factory, fact_factory, caplog):
        patch = patch_factory("p-empty", [fact_factory("f1")])
        with caplog.at_level(logging.WARNING, logger="knowevo.clustering.similarity_graph"):
            assert cluster_by_similarity(patch) == []
        assert "sans embeddings" in caplog.text

    def test_order_independence(self, clustered_patch, embedding_factory):
        extra = [embedding_factory("f4", [0.0, 0.1, 1.0]), embedding_factory("f5", [0.95, 0.2, 0.0])]
        embeddings = list(clustered_patch.embeddings) + extra
        expected = None
        for permutation in itertools.permutations(embeddings):
            patch = clustered_patch.model_copy(update={"embeddings": tuple(permutation)})
            clusters = set(cluster_by_similarity(patch, 0.75))
            if expected is None:
                expected = clusters
            assert clusters == expected
        assert expected == {frozenset({"f1", "f2", "f5"}), frozenset({"f3", "f4"})}

    def test_non_finite_embedding_is_never_clustered(self, patch_factory, fact_factory, embedding_factory):
        patch = patch_factory(
            "p-nan",
            [fact_factory("a"), fact_factory("b")],
            embeddings=[embedding_factory("a", [float("nan"), 0.0]), embedding_factory("b", [0.0, 1.0])],
        )
        assert cluster_by_similarity(patch, 0.75) == []
        assert build_similarity_graph(patch.embeddings, -1.0).edges == ()
