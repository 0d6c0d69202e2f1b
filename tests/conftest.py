from __future__ import annotations

import importlib
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Dict, List, Optional, Sequence

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from knowevo.ingestion.interfaces import Embedder, FactExtractor  # noqa: E402
from knowevo.models import Edge, EdgeRelation, Embedding, Fact, Patch  # noqa: E402


@dataclass
class RuntimeEnv:
    """Accès au module settings rechargé contre un data_dir isolé."""

    data_dir: Path
    settings_module: ModuleType


@pytest.fixture
def runtime_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> RuntimeEnv:
    """Recharge la configuration contre un répertoire de données isolé."""

    data_dir = tmp_path / "data"
    monkeypatch.setenv("KNOWEVO_DATA_DIR", str(data_dir))
    for var in ("KNOWEVO_LOGS_DIR", "KNOWEVO_STORE_DIR", "KNOWEVO_ENGINE_CONFIG",
                "DEBUG_MODE", "SIMILARITY_WORKERS"):
        monkeypatch.delenv(var, raising=False)

    settings_module = importlib.import_module("knowevo.config.settings")
    settings_module = importlib.reload(settings_module)
    settings_module.get_settings.cache_clear()

    yield RuntimeEnv(data_dir=data_dir, settings_module=settings_module)

    settings_module.get_settings.cache_clear()


# ========================================
# Fabriques de modèles (ids lisibles)
# ========================================

def build_fact(fact_id: str, confidence: float = 0.7, topic: Optional[str] = None,
               text: Optional[str] = None, **kwargs) -> Fact:
    return Fact(id=fact_id, text=text or f"fact {fact_id}", confidence=confidence,
                topic=topic, **kwargs)


def build_edge(edge_id: str, from_id: str, to_id: str,
               relation: EdgeRelation = EdgeRelation.SUPPORTS, strength: float = 0.5) -> Edge:
    return Edge(id=edge_id, from_id=from_id, to_id=to_id, relation=relation, strength=strength)


def build_embedding(claim_ref: str, vector: Sequence[float], model: str = "test-model") -> Embedding:
    return Embedding(id=f"emb-{claim_ref}", claim_ref=claim_ref, model=model, vector=tuple(vector))


def build_patch(patch_id: str, facts: Sequence[Fact] = (), edges: Sequence[Edge] = (),
                embeddings: Sequence[Embedding] = (), **kwargs) -> Patch:
    return Patch(id=patch_id, facts=tuple(facts), edges=tuple(edges),
                 embeddings=tuple(embeddings), **kwargs)


@pytest.fixture
def fact_factory():
    return build_fact


@pytest.fixture
def edge_factory():
    return build_edge


@pytest.fixture
def embedding_factory():
    return build_embedding


@pytest.fixture
def patch_factory():
    return build_patch


@pytest.fixture
def clustered_patch() -> Patch:
    """
    f1/f2 très proches (cosine 0.9+), f3 orthogonal.
    """
    facts = [
        build_fact("f1", 0.8, "climate", "Global temperature rises every decade"),
        build_fact("f2", 0.7, "climate", "Temperature rises faster in the arctic"),
        build_fact("f3", 0.6, "economy", "Inflation slowed down"),
    ]
    embeddings = [
        build_embedding("f1", [1.0, 0.0, 0.0]),
        build_embedding("f2", [0.9, 0.3, 0.0]),
        build_embedding("f3", [0.0, 0.0, 1.0]),
    ]
    return build_patch("p-cluster", facts, embeddings=embeddings)


# ========================================
# Collaborateurs factices
# ========================================

class StaticExtractor(FactExtractor):
    """Retourne des triplets préparés par texte."""

    def __init__(self, responses: Dict[str, List[dict]]):
        self.responses = responses
        self.calls: List[str] = []

    def extract(self, text: str) -> List[dict]:
        self.calls.append(text)
        return list(self.responses.get(text, []))


class KeywordEmbedder(Embedder):
    """Vecteur = présence de mots-clés fixés (déterministe)."""

    def __init__(self, keywords: Sequence[str], name: str = "keyword-v1"):
        self.keywords = [k.lower() for k in keywords]
        self._name = name
        self.calls: List[str] = []

    @property
    def model_name(self) -> str:
        return self._name

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        lowered = text.lower()
        return [1.0 if k in lowered else 0.0 for k in self.keywords]


@pytest.fixture
def keyword_embedder() -> KeywordEmbedder:
    return KeywordEmbedder(["temperature", "arctic", "inflation", "prices"])
