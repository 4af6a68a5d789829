# src/cfarag/loaders/base.py
"""Loader abstract base class."""

from abc import ABC, abstractmethod


class Loader(ABC):
    """Abstract base class for extracting plain text from files."""

    @abstractmethod
    def extract_text(self, path: str) -> str:
        """Extract the full plain text of a file.

        Args:
            path: Path to the file to read

        Returns:
            Extracted text (may be empty if the file has no text layer)

        Raises:
            FileNotFoundError: If the file does not exist
        """
        ...

    @abstractmethod
    def supports(self, path: str) -> bool:
        """Check if this loader supports the given path."""
        ...
