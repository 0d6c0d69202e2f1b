"""Comparaison ensembliste des facts de deux patches (par id)."""

from __future__ import annotations

from typing import FrozenSet, List

from knowevo.models.fact import Fact
from knowevo.models.patch import Patch


def fact_ids(patch: Patch) -> FrozenSet[str]:
    return frozenset(f.id for f in patch.facts)


def edge_ids(patch: Patch) -> FrozenSet[str]:
    return frozenset(e.id for e in patch.edges)


def new_facts(patch1: Patch, patch2: Patch) -> List[Fact]:
    """Facts de patch2 absents de patch1 (ordre de patch2)."""
    ids1 = fact_ids(patch1)
    return [f for f in patch2.facts if f.id not in ids1]


def removed_facts(patch1: Patch, patch2: Patch) -> List[Fact]:
    """Facts de patch1 absents de patch2 (ordre de patch1)."""
    return new_facts(patch2, patch1)


def common_facts(patch1: Patch, patch2: Patch) -> List[Fact]:
    """Facts présents dans les deux patches, valeurs de patch1."""
    ids2 = fact_ids(patch2)
    return [f for f in patch1.facts if f.id in ids2]
