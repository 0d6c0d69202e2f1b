"""
Tests de la validation structurelle des patches.
"""

from knowevo.models import ViolationCode, is_valid_patch, validate_patch


class TestValidatePatch:
    """Chaque invariant violé est rapporté, rien n'est réparé."""

    def test_valid_patch(self, patch_factory, fact_factory, edge_factory, embedding_factory):
        patch = patch_factory(
            "p1",
            [fact_factory("f1"), fact_factory("f2")],
            edges=[edge_factory("e1", "f1", "f2")],
            embeddings=[embedding_factory("f1", [1.0, 0.0]), embedding_factory("f2", [0.0, 1.0])],
        )
        report = validate_patch(patch)
        assert report.valid
        assert report.violations == ()
        assert is_valid_patch(patch)

    def test_duplicate_fact_ids(self, patch_factory, fact_factory):
        patch = patch_factory("p1", [fact_factory("f1"), fact_factory("f1", 0.2)])
        report = validate_patch(patch)
        assert not report.valid
        assert report.codes() == [ViolationCode.DUPLICATE_FACT_ID]
        assert report.violations[0].entity_id == "f1"

    def test_dangling_edge_endpoints(self, patch_factory, fact_factory, edge_factory):
        patch = patch_factory("p1", [fact_factory("f1")], edges=[edge_factory("e1", "f1", "ghost")])
        report = validate_patch(patch)
        assert report.codes() == [ViolationCode.DANGLING_EDGE_ENDPOINT]
        assert "ghost" in report.violations[0].message

    def test_ranges(self, patch_factory, fact_factory, edge_factory):
        patch = patch_factory(
            "p1",
            [fact_factory("f1", 1.2), fact_factory("f2", 0.5, lod=4)],
            edges=[edge_factory("e1", "f1", "f2", strength=-0.1)],
        )
        codes = set(validate_patch(patch).codes())
        assert codes == {
            ViolationCode.CONFIDENCE_OUT_OF_RANGE,
            ViolationCode.LOD_OUT_OF_RANGE,
            ViolationCode.STRENGTH_OUT_OF_RANGE,
        }

    def test_duplicate_edge_ids(self, patch_factory, fact_factory, edge_factory):
        patch = patch_factory(
            "p1",
            [fact_factory("f1"), fact_factory("f2")],
            edges=[edge_factory("e1", "f1", "f2"), edge_factory("e1", "f2", "f1")],
        )
        assert validate_patch(patch).codes() == [ViolationCode.DUPLICATE_EDGE_ID]

    def test_embedding_violations(self, patch_factory, fact_factory, embedding_factory):
        patch = patch_factory(
            "p1",
            [fact_factory("f1"), fact_factory("f2")],
            embeddings=[
                embedding_factory("f1", [1.0, 0.0]),
                embedding_factory("f1", [0.0, 1.0]),
                embedding_factory("f2", [1.0, 0.0, 0.0]),
                embedding_factory("ghost", [1.0, 0.0]),
            ],
        )
        codes = validate_patch(patch).codes()
        assert ViolationCode.DUPLICATE_EMBEDDING in codes
        assert ViolationCode.EMBEDDING_DIMENSION_MISMATCH in codes
        assert ViolationCode.EMBEDDING_UNKNOWN_CLAIM in codes

    def test_reports_every_violation(self, patch_factory, fact_factory, edge_factory):
        patch = patch_factory(
            "p1",
            [fact_factory("f1", 2.0), fact_factory("f1", -1.0)],
            edges=[edge_factory("e1", "f1", "nope")],
        )
        report = validate_patch(patch)
        assert report.codes().count(ViolationCode.CONFIDENCE_OUT_OF_RANGE) == 2
        assert ViolationCode.DUPLICATE_FACT_ID in report.codes()
        assert ViolationCode.DANGLING_EDGE_ENDPOINT in report.codes()
        # Rien n'est réparé
        assert len(patch.facts) == 2

    def test_non_finite_embedding(self, patch_factory, fact_factory, embedding_factory):
        patch = patch_factory(
            "p1",
            [fact_factory("f1"), fact_factory("f2")],
            embeddings=[
                embedding_factory("f1", [float("nan"), 0.0]),
                embedding_factory("f2", [0.0, float("inf")]),
            ],
        )
        report = validate_patch(patch)
        assert report.codes() == [ViolationCode.NON_FINITE_EMBEDDING] * 2
        assert {v.entity_id for v in report.violations} == {"emb-f1", "emb-f2"}
