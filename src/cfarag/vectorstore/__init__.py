"""Vector index implementations for cfarag."""

from cfarag.vectorstore.base import VectorIndex
from cfarag.vectorstore.chroma import ChromaChunkIndex

__all__ = ["VectorIndex", "ChromaChunkIndex"]
