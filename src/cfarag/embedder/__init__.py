# src/cfarag/embedder/__init__.py
"""Embedding functionality for cfarag."""

from cfarag.embedder.base import Embedder
from cfarag.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder"]
