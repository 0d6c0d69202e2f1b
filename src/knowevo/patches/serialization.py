"""
Sérialisation JSON des entités (patch, morphism, motive).

Forme logique : un enregistrement plat de champs nommés, vecteurs en
tableaux numériques ordonnés, timestamps ISO-8601 (sérialisation pydantic
mode="json").
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Type, TypeVar

from pydantic import BaseModel

from knowevo.models.morphism import Morphism
from knowevo.models.motive import Motive
from knowevo.models.patch import Patch

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def to_json(entity: BaseModel, indent: Optional[int] = None) -> str:
    return entity.model_dump_json(indent=indent)


def from_json(model_cls: Type[ModelT], payload: str) -> ModelT:
    return model_cls.model_validate_json(payload)


def patch_to_json(patch: Patch, indent: Optional[int] = None) -> str:
    return to_json(patch, indent=indent)


def patch_from_json(payload: str) -> Patch:
    return from_json(Patch, payload)


def morphism_to_json(morphism: Morphism, indent: Optional[int] = None) -> str:
    return to_json(morphism, indent=indent)


def morphism_from_json(payload: str) -> Morphism:
    return from_json(Morphism, payload)


def motive_to_json(motive: Motive, indent: Optional[int] = None) -> str:
    return to_json(motive, indent=indent)


def motive_from_json(payload: str) -> Motive:
    return from_json(Motive, payload)


def write_atomic(filepath: Path, content: str) -> None:
    """Écrit via un fichier temporaire + os.replace (tout ou rien)."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=filepath.parent, prefix=".tmp-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_path, filepath)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def save_patch(patch: Patch, filepath: Path) -> Path:
    filepath = Path(filepath)
    write_atomic(filepath, patch_to_json(patch, indent=2))
    logger.info(f"[EVO:Serialization] Patch {patch.id} sauvegardé dans {filepath}")
    return filepath


def load_patch(filepath: Path) -> Optional[Patch]:
    """Charge un patch ; None si le fichier n'existe pas."""
    filepath = Path(filepath)
    if not filepath.exists():
        return None
    return patch_from_json(filepath.read_text(encoding="utf-8"))
