# src/knowevo/persistence/file_store.py
"""
Store fichier : un document JSON par entité.

    <root>/patches/<patch_id>.json
    <root>/morphisms/<morphism_id>.json
    <root>/motives/<motive_id>.json   ({"patch_id": ..., "motive": {...}})

Chaque écriture passe par un fichier temporaire + os.replace : un patch
est entièrement présent ou absent. L'ordre de stockage est conservé via
l'horodatage de modification des fichiers.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from knowevo.common.errors import PatchNotFoundError
from knowevo.models.morphism import Morphism
from knowevo.models.motive import Motive
from knowevo.models.patch import Patch
from knowevo.patches.serialization import (
    load_patch,
    morphism_from_json,
    morphism_to_json,
    patch_to_json,
    write_atomic,
)
from knowevo.persistence.store import PatchStore

logger = logging.getLogger(__name__)


class JsonFilePatchStore(PatchStore):

    def __init__(self, root_dir: Optional[Union[str, Path]] = None):
        if root_dir is None:
            from knowevo.config.settings import get_settings

            root_dir = get_settings().store_dir
        self.root_dir = Path(root_dir)
        self.patches_dir = self.root_dir / "patches"
        self.morphisms_dir = self.root_dir / "morphisms"
        self.motives_dir = self.root_dir / "motives"
        for directory in (self.patches_dir, self.morphisms_dir, self.motives_dir):
            directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"[EVO:Store] Store fichier initialisé dans {self.root_dir}")

    @staticmethod
    def _sorted_files(directory: Path) -> List[Path]:
        return sorted(directory.glob("*.json"), key=lambda p: (p.stat().st_mtime_ns, p.name))

    def _write_patch(self, patch: Patch) -> None:
        write_atomic(self.patches_dir / f"{patch.id}.json", patch_to_json(patch, indent=2))

    def retrieve_patch(self, patch_id: str) -> Patch:
        patch = load_patch(self.patches_dir / f"{patch_id}.json")
        if patch is None:
            raise PatchNotFoundError(patch_id)
        return patch

    def all_patches(self) -> List[Patch]:
        return [load_patch(path) for path in self._sorted_files(self.patches_dir)]

    def store_morphism(self, morphism: Morphism) -> str:
        write_atomic(
            self.morphisms_dir / f"{morphism.id}.json",
            morphism_to_json(morphism, indent=2),
        )
        return morphism.id

    def all_morphisms(self) -> List[Morphism]:
        return [
            morphism_from_json(path.read_text(encoding="utf-8"))
            for path in self._sorted_files(self.morphisms_dir)
        ]

    def store_motive(self, motive: Motive, patch_id: Optional[str] = None) -> str:
        document = {"patch_id": patch_id, "motive": motive.model_dump(mode="json")}
        write_atomic(
            self.motives_dir / f"{motive.id}.json",
            json.dumps(document, ensure_ascii=False, indent=2),
        )
        return motive.id

    def _motive_documents(self) -> List[dict]:
        return [
            json.loads(path.read_text(encoding="utf-8"))
            for path in self._sorted_files(self.motives_dir)
        ]

    def all_motives(self) -> List[Motive]:
        return [Motive.model_validate(doc["motive"]) for doc in self._motive_documents()]

    def motives_for_patch(self, patch_id: str) -> List[Motive]:
        return [
            Motive.model_validate(doc["motive"])
            for doc in self._motive_documents()
            if doc.get("patch_id") == patch_id
        ]
