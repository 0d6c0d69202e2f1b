# src/knowevo/ingestion/edge_inference.py
"""
Inférence d'edges simples à partir des topics.

Les facts d'un même topic sont chaînés dans l'ordre du patch par des
edges "supports" de force 0.5 (f1 → f2 → f3...).
"""

from __future__ import annotations

import logging
from typing import Dict

from knowevo.models.fact import EdgeRelation, make_edge
from knowevo.models.patch import Patch

logger = logging.getLogger(__name__)

TOPIC_EDGE_STRENGTH = 0.5


def infer_topic_edges(patch: Patch) -> Patch:
    last_by_topic: Dict[str, str] = {}
    edges = []
    for fact in patch.facts:
        if fact.topic is None:
            continue
        previous = last_by_topic.get(fact.topic)
        if previous is not None:
            edges.append(make_edge(previous, fact.id, EdgeRelation.SUPPORTS, TOPIC_EDGE_STRENGTH))
        last_by_topic[fact.topic] = fact.id

    if not edges:
        return patch

    logger.debug(f"[EVO:Edges] {len(edges)} edges 'supports' inférés par topic")
    return patch.model_copy(update={"edges": patch.edges + tuple(edges)})
