"""
Tests des modèles immuables (Fact, Edge, Patch, Morphism, Motive).
"""

import pytest
from pydantic import ValidationError

from knowevo.models import (
    AddFactOp,
    EdgeRelation,
    Morphism,
    MorphismDelta,
    MorphismType,
    Motive,
    MotiveEdge,
    MotiveGraph,
    OperationKind,
    Patch,
    RemoveEdgeOp,
    UpdateConfidenceOp,
    make_edge,
    make_fact,
    make_patch,
)


class TestFactAndEdge:
    """Construction des facts et edges."""

    def test_make_fact_generates_unique_ids(self):
        f1 = make_fact("Water boils at 100C", 0.9, topic="physics")
        f2 = make_fact("Water boils at 100C", 0.9, topic="physics")
        assert f1.id != f2.id
        assert f1.valid_from.tzinfo is not None
        assert f1.tags == frozenset()
        assert f1.lod == 0

    def test_fact_is_frozen(self, fact_factory):
        fact = fact_factory("f1", 0.5)
        with pytest.raises(ValidationError):
            fact.confidence = 0.9

    def test_out_of_range_confidence_is_constructible(self):
        """Les bornes sont vérifiées par validate_patch, pas à la construction."""
        fact = make_fact("x", 1.5)
        assert fact.confidence == 1.5

    def test_make_edge_accepts_relation_string(self):
        edge = make_edge("f1", "f2", "contradicts", 0.4)
        assert edge.relation == EdgeRelation.CONTRADICTS
        assert edge.from_id == "f1"
        assert edge.to_id == "f2"

    def test_make_edge_rejects_unknown_relation(self):
        with pytest.raises(ValueError):
            make_edge("f1", "f2", "loves", 0.4)


class TestPatch:
    """Indexation et construction des patches."""

    def test_make_patch_converts_sequences(self, fact_factory):
        patch = make_patch([fact_factory("f1"), fact_factory("f2")], source_id="src-1")
        assert isinstance(patch.facts, tuple)
        assert patch.source == "manual"
        assert patch.source_id == "src-1"
        assert patch.metadata == {}

    def test_indexes(self, fact_factory, edge_factory, embedding_factory):
        patch = make_patch(
            [fact_factory("f1"), fact_factory("f2")],
            edges=[edge_factory("e1", "f1", "f2")],
            embeddings=[embedding_factory("f1", [1.0, 0.0])],
        )
        assert set(patch.fact_index()) == {"f1", "f2"}
        assert set(patch.edge_index()) == {"e1"}
        assert set(patch.embedding_index()) == {"f1"}

    def test_is_empty(self, patch_factory, fact_factory):
        assert patch_factory("p0").is_empty
        assert not patch_factory("p1", [fact_factory("f1")]).is_empty

    def test_patch_is_frozen(self, patch_factory):
        patch = patch_factory("p1")
        with pytest.raises(ValidationError):
            patch.source = "other"

    def test_metadata_is_read_only(self, patch_factory):
        source = {"k": 1}
        patch = patch_factory("p1", metadata=source)
        with pytest.raises(TypeError):
            patch.metadata["k"] = 2
        with pytest.raises(TypeError):
            patch.metadata["other"] = 3
        source["k"] = 99
        assert patch.metadata == {"k": 1}

    def test_metadata_dumped_as_dict(self, patch_factory):
        patch = patch_factory("p1", metadata={"num_texts": 2})
        assert patch.model_dump()["metadata"] == {"num_texts": 2}
        assert type(patch.model_dump(mode="json")["metadata"]) is dict
        restored = Patch.model_validate_json(patch.model_dump_json())
        assert restored == patch
        with pytest.raises(TypeError):
            restored.metadata["num_texts"] = 3

    def test_patch_is_hashable(self, patch_factory, fact_factory):
        patch = patch_factory("p1", [fact_factory("f1")], metadata={"k": 1})
        twin = Patch.model_validate(patch.model_dump())
        assert hash(patch) == hash(twin)
        assert {patch, twin} == {patch}


class TestMorphismModel:
    """Opérations, delta et morphism."""

    def test_update_confidence_change(self):
        op = UpdateConfidenceOp(fact_id="f1", old=0.6, new=0.9)
        assert op.change == pytest.approx(0.3)
        assert op.op == OperationKind.UPDATE_CONFIDENCE

    def test_operations_validate_from_dicts(self, fact_factory):
        fact = fact_factory("f3", 0.8)
        morphism = Morphism.model_validate({
            "from_patch": "p1",
            "to_patch": "p2",
            "type": "additive",
            "operations": [
                {"op": "add-fact", "fact_id": "f3", "fact": fact.model_dump()},
                {"op": "remove-edge", "edge_id": "e1"},
            ],
        })
        assert isinstance(morphism.operations[0], AddFactOp)
        assert isinstance(morphism.operations[1], RemoveEdgeOp)
        assert morphism.type == MorphismType.ADDITIVE

    def test_delta_combine(self):
        d1 = MorphismDelta(facts_added=1, edges_removed=2)
        d2 = MorphismDelta(facts_added=2, facts_removed=1, edges_added=3)
        combined = d1.combine(d2)
        assert combined == MorphismDelta(
            facts_added=3, facts_removed=1, edges_added=3, edges_removed=2
        )
        assert MorphismDelta().is_empty
        assert not combined.is_empty

    def test_is_identity_and_operations_of(self):
        identity = Morphism(from_patch="p1", to_patch="p2", type=MorphismType.TRANSITION)
        assert identity.is_identity

        morphism = Morphism(
            from_patch="p1",
            to_patch="p2",
            type=MorphismType.REORGANIZATION,
            operations=(RemoveEdgeOp(edge_id="e1"), RemoveEdgeOp(edge_id="e2")),
        )
        assert not morphism.is_identity
        assert len(morphism.operations_of(OperationKind.REMOVE_EDGE)) == 2
        assert morphism.operations_of(OperationKind.ADD_FACT) == ()


class TestMotiveGraphModel:

    def test_neighbors(self):
        m1 = Motive(id="m1", confidence=0.8, cluster_size=2, member_claim_ids=frozenset({"a", "b"}))
        m2 = Motive(id="m2", confidence=0.8, cluster_size=2, member_claim_ids=frozenset({"c", "d"}))
        graph = MotiveGraph(
            nodes=(m1, m2),
            edges=(MotiveEdge(from_id="m1", to_id="m2", strength=0.7),),
        )
        assert graph.neighbors("m1") == ("m2",)
        assert graph.neighbors("m2") == ()
