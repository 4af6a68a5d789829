# src/cfarag/loaders/text.py
"""Text and Markdown file loader."""

from pathlib import Path

from cfarag.loaders.base import Loader


class TextLoader(Loader):
    """Load plain text and markdown study notes."""

    SUPPORTED_EXTENSIONS = {".txt", ".md", ".markdown", ".text"}

    def supports(self, path: str) -> bool:
        """Check if this loader supports the given file."""
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def extract_text(self, path: str) -> str:
        """Read a text file as UTF-8."""
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return file_path.read_text(encoding="utf-8")
