# src/knowevo/morphism/chaining.py
"""
Recherche de chemin et composition de morphisms.

Le graphe des morphisms est orienté (from_patch → to_patch) et reconstruit
à chaque appel. find_path() est un BFS itératif dont l'ensemble visited
est propre à l'appel : les cycles sont sans effet et plusieurs recherches
concurrentes ne partagent aucun état.
"""

from __future__ import annotations

import logging
from collections import defaultdict, deque
from typing import Dict, List, Optional, Sequence

from knowevo.models.morphism import Morphism, MorphismDelta, MorphismType

logger = logging.getLogger(__name__)


def _adjacency(morphisms: Sequence[Morphism]) -> Dict[str, List[Morphism]]:
    adjacency: Dict[str, List[Morphism]] = defaultdict(list)
    for morphism in morphisms:
        adjacency[morphism.from_patch].append(morphism)
    return adjacency


def find_path(
    from_id: str,
    to_id: str,
    morphisms: Sequence[Morphism],
) -> Optional[List[Morphism]]:
    """
    Cherche un chemin de morphisms from_id → to_id.

    Returns:
        Liste ordonnée de morphisms (chemin le plus court en nombre de
        sauts), [] si from_id == to_id, None si aucun chemin.
    """
    if from_id == to_id:
        return []

    adjacency = _adjacency(morphisms)
    visited = {from_id}
    # patch_id → morphism par lequel on l'a atteint
    came_by: Dict[str, Morphism] = {}
    queue = deque([from_id])

    while queue:
        current = queue.popleft()
        for morphism in adjacency.get(current, ()):
            nxt = morphism.to_patch
            if nxt in visited:
                continue
            visited.add(nxt)
            came_by[nxt] = morphism
            if nxt == to_id:
                return _rebuild_path(came_by, from_id, to_id)
            queue.append(nxt)

    logger.warning(
        f"[EVO:Chaining] Aucun chemin {from_id} → {to_id} "
        f"({len(morphisms)} morphisms, {len(visited)} patches visités)"
    )
    return None


def _rebuild_path(came_by: Dict[str, Morphism], from_id: str, to_id: str) -> List[Morphism]:
    path = []
    current = to_id
    while current != from_id:
        morphism = came_by[current]
        path.append(morphism)
        current = morphism.from_patch
    path.reverse()
    return path


def chain_morphisms(morphisms: Sequence[Morphism]) -> Optional[Morphism]:
    """
    Compose N morphisms contigus en un morphism COMPOSITE.

    - opérations concaténées dans l'ordre
    - deltas sommés composante par composante
    - gains sommés puis clampés dans [0, 1] (pas de recalcul depuis les
      patches extrémités)
    - liste d'origine conservée dans `chain`

    Returns:
        Morphism composite, None si la liste est vide

    Raises:
        ValueError: si m[i].to_patch != m[i+1].from_patch
    """
    if not morphisms:
        return None

    for current, nxt in zip(morphisms, morphisms[1:]):
        if current.to_patch != nxt.from_patch:
            raise ValueError(
                f"Chaîne non contiguë: {current.id} se termine sur {current.to_patch}, "
                f"{nxt.id} part de {nxt.from_patch}"
            )

    operations = []
    delta = MorphismDelta()
    gain = 0.0
    for morphism in morphisms:
        operations.extend(morphism.operations)
        delta = delta.combine(morphism.delta)
        gain += morphism.information_gain

    composite = Morphism(
        from_patch=morphisms[0].from_patch,
        to_patch=morphisms[-1].to_patch,
        type=MorphismType.COMPOSITE,
        reason=f"Composite de {len(morphisms)} morphisms",
        operations=tuple(operations),
        delta=delta,
        information_gain=max(0.0, min(1.0, gain)),
        chain=tuple(morphisms),
    )

    logger.debug(
        f"[EVO:Chaining] Composite {composite.from_patch} → {composite.to_patch}: "
        f"{len(morphisms)} morphisms, {len(operations)} ops, gain={composite.information_gain:.3f}"
    )
    return composite


def compose_path(
    from_id: str,
    to_id: str,
    morphisms: Sequence[Morphism],
) -> Optional[Morphism]:
    """find_path() puis chain_morphisms() ; None si aucun chemin ou chemin vide."""
    path = find_path(from_id, to_id, morphisms)
    if not path:
        return None
    return chain_morphisms(path)
