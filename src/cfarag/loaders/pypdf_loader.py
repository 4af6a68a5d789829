# src/cfarag/loaders/pypdf_loader.py
"""PDF loader using pypdf - lightweight, pure Python."""

from pathlib import Path

from pypdf import PdfReader

from cfarag.loaders.base import Loader


class PyPDFLoader(Loader):
    """Extract text from PDF training material using pypdf.

    Pages are joined with blank lines so page boundaries act as paragraph
    boundaries for the chunker.
    """

    SUPPORTED_EXTENSIONS = {".pdf"}

    def supports(self, path: str) -> bool:
        """Check if this loader supports the given file."""
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def extract_text(self, path: str) -> str:
        """Extract text from every page of a PDF.

        Raises:
            FileNotFoundError: If file does not exist
        """
        file_path = Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        reader = PdfReader(path)
        pages = []
        for page in reader.pages:
            text = page.extract_text() or ""
            if text.strip():
                pages.append(text.strip())

        return "\n\n".join(pages)
