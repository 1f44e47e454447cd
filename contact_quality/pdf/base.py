from abc import ABC, abstractmethod
from typing import ClassVar

from contact_quality.pdf.exceptions import PdfExtractionError


class BasePdfExtractor(ABC):
    """Turns an uploaded PDF into the text sent for analysis.

    Subclasses only produce per-page text; joining, stripping and error
    wrapping happen here so every engine fails the same way.
    """

    engine: ClassVar[str]

    def extract(self, pdf_bytes: bytes) -> str:
        """Return the page texts joined by newlines, stripped.

        Raises:
            PdfExtractionError: if the engine cannot read ``pdf_bytes``.
        """
        try:
            pages = self._extract_pages(pdf_bytes)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"{self.engine} extraction failed: {exc}") from exc
        return "\n".join(page for page in pages if page).strip()

    @abstractmethod
    def _extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Text of each page, in page order."""
