from contact_quality.config.settings import Settings
from contact_quality.pdf.base import BasePdfExtractor
from contact_quality.pdf.pdfplumber_adapter import PdfPlumberAdapter
from contact_quality.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Picks the extractor whose ``engine`` matches ``settings.pdf_engine``."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        adapter.engine: adapter for adapter in (PdfPlumberAdapter, PyMuPdfAdapter)
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        try:
            return cls.ADAPTERS[engine]()
        except KeyError:
            raise ValueError(
                f"Unknown PDF engine '{settings.pdf_engine}'. Choose from: {', '.join(sorted(cls.ADAPTERS))}"
            ) from None
