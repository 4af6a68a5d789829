# src/cfarag/loaders/registry.py
"""Loader registry for auto-selecting file loaders."""

from cfarag.loaders.base import Loader
from cfarag.loaders.pypdf_loader import PyPDFLoader
from cfarag.loaders.text import TextLoader


class LoaderRegistry:
    """Registry for file loaders.

    Automatically selects the appropriate loader based on file extension.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._loaders: list[Loader] = []

    def register(self, loader: Loader) -> None:
        """Register a loader."""
        self._loaders.append(loader)

    def find_loader(self, path: str) -> Loader | None:
        """Find a loader that supports the given path."""
        for loader in self._loaders:
            if loader.supports(path):
                return loader
        return None

    def supports(self, path: str) -> bool:
        """True if any registered loader handles the path."""
        return self.find_loader(path) is not None

    def extract_text(self, path: str) -> str:
        """Extract text using the appropriate loader.

        Raises:
            ValueError: If no loader supports the file type
        """
        loader = self.find_loader(path)
        if loader is None:
            raise ValueError(f"No loader found for: {path}")
        return loader.extract_text(path)

    @classmethod
    def default(cls) -> "LoaderRegistry":
        """Create a registry with the PDF and text loaders registered."""
        registry = cls()
        registry.register(PyPDFLoader())
        registry.register(TextLoader())
        return registry
