from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_DATA_DIR = Path(os.getenv("KNOWEVO_DATA_DIR", PROJECT_ROOT / "data")).expanduser()


class Settings(BaseSettings):
    """Configuration d'environnement du projet knowevo."""

    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    debug_mode: bool = Field(default=False, alias="DEBUG_MODE")

    data_dir: Path = Field(default=DEFAULT_DATA_DIR, alias="KNOWEVO_DATA_DIR")
    logs_dir: Optional[Path] = Field(default=None, alias="KNOWEVO_LOGS_DIR")
    store_dir: Optional[Path] = Field(default=None, alias="KNOWEVO_STORE_DIR")

    # Fichier YAML des seuils/poids du moteur (optionnel)
    engine_config_path: Optional[Path] = Field(default=None, alias="KNOWEVO_ENGINE_CONFIG")

    # Parallélisme du calcul de similarité pairwise (None = valeur de la config moteur)
    similarity_workers: Optional[int] = Field(default=None, ge=1, alias="SIMILARITY_WORKERS")

    @model_validator(mode="after")
    def derive_directories(self) -> "Settings":
        """Déduit logs/store depuis data_dir s'ils ne sont pas fournis."""
        if self.logs_dir is None:
            self.logs_dir = self.data_dir / "logs"
        if self.store_dir is None:
            self.store_dir = self.data_dir / "store"
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
