"""
Opérations pures sur les Patches : requêtes, transformations, LOD,
comparaison et sérialisation.
"""

from knowevo.patches.comparison import (
    common_facts,
    edge_ids,
    fact_ids,
    new_facts,
    removed_facts,
)
from knowevo.patches.lod import create_lod_version, patch_at_lod, summarize_text
from knowevo.patches.queries import (
    PatchStats,
    average_confidence,
    facts_at_time,
    get_edges_from,
    get_edges_to,
    get_fact,
    get_facts_by_confidence,
    get_facts_by_topic,
    get_related_facts,
    high_confidence_facts,
    patch_stats,
    revision_chain,
    revision_history,
    topic_histogram,
    uncertain_facts,
)
from knowevo.patches.serialization import (
    load_patch,
    morphism_from_json,
    morphism_to_json,
    motive_from_json,
    motive_to_json,
    patch_from_json,
    patch_to_json,
    save_patch,
)
from knowevo.patches.transforms import (
    add_edge,
    add_embeddings,
    add_fact,
    remove_fact,
    update_fact_confidence,
    with_new_identity,
)

__all__ = [
    "common_facts",
    "edge_ids",
    "fact_ids",
    "new_facts",
    "removed_facts",
    "create_lod_version",
    "patch_at_lod",
    "summarize_text",
    "PatchStats",
    "average_confidence",
    "facts_at_time",
    "get_edges_from",
    "get_edges_to",
    "get_fact",
    "get_facts_by_confidence",
    "get_facts_by_topic",
    "get_related_facts",
    "high_confidence_facts",
    "patch_stats",
    "revision_chain",
    "revision_history",
    "topic_histogram",
    "uncertain_facts",
    "load_patch",
    "morphism_from_json",
    "morphism_to_json",
    "motive_from_json",
    "motive_to_json",
    "patch_from_json",
    "patch_to_json",
    "save_patch",
    "add_edge",
    "add_embeddings",
    "add_fact",
    "remove_fact",
    "update_fact_confidence",
    "with_new_identity",
]
