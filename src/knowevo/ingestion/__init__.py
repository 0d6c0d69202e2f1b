"""Adaptateurs d'ingestion : collaborateurs → Facts, Embeddings, Edges."""

from knowevo.ingestion.edge_inference import infer_topic_edges
from knowevo.ingestion.embedding_attacher import attach_embeddings
from knowevo.ingestion.fact_normalizer import normalize_extracted_facts
from knowevo.ingestion.interfaces import Embedder, FactExtractor
from knowevo.ingestion.transcript import TranscriptChunk, TranscriptSegment, chunk_transcript

__all__ = [
    "infer_topic_edges",
    "attach_embeddings",
    "normalize_extracted_facts",
    "Embedder",
    "FactExtractor",
    "TranscriptChunk",
    "TranscriptSegment",
    "chunk_transcript",
]
