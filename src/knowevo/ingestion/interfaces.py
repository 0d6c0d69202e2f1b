"""
Interfaces des collaborateurs externes (extraction, embeddings).

Les appels réseau vivent derrière ces interfaces, en amont du moteur :
le moteur ne reçoit que des données déjà typées.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence


class FactExtractor(ABC):
    """Service d'extraction de facts"""

    @abstractmethod
    def extract(self, text: str) -> List[Dict[str, Any]]:
        """Retourne une liste de triplets {text, confidence, topic}"""
        pass


class Embedder(ABC):
    """Service d'embeddings"""

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Nom/version du modèle (tag des Embedding produits)"""
        pass

    @abstractmethod
    def embed(self, text: str) -> Sequence[float]:
        """Vecteur d'un texte"""
        pass

    def embed_batch(self, texts: Sequence[str]) -> List[Sequence[float]]:
        """Vecteurs d'un lot de textes (défaut : un appel embed() par texte)"""
        return [self.embed(text) for text in texts]
