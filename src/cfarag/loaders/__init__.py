"""File loaders for cfarag."""

from cfarag.loaders.base import Loader
from cfarag.loaders.pypdf_loader import PyPDFLoader
from cfarag.loaders.registry import LoaderRegistry
from cfarag.loaders.text import TextLoader

__all__ = ["Loader", "LoaderRegistry", "PyPDFLoader", "TextLoader"]
