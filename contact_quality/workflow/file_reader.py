from concurrent.futures import ThreadPoolExecutor

from contact_quality.pdf.base import BasePdfExtractor
from contact_quality.workflow.models import FileText, UploadedFile

PDF_MEDIA_TYPE = "application/pdf"


class FileReader:
    """Turns uploaded files into text for ingestion."""

    def __init__(self, pdf_extractor: BasePdfExtractor, max_workers: int = 4) -> None:
        self._pdf_extractor = pdf_extractor
        self._max_workers = max(1, max_workers)

    def read(self, file: UploadedFile) -> FileText:
        """Read one file. PDFs go through the extractor, anything else is UTF-8 text.

        Raises:
            PdfExtractionError: if a PDF cannot be read.
        """
        if file.extension == "pdf" or file.media_type == PDF_MEDIA_TYPE:
            content = self._pdf_extractor.extract(file.content)
        else:
            content = file.content.decode("utf-8-sig", errors="replace")
        return FileText(name=file.name, content=content)

    def read_all(self, files: list[UploadedFile]) -> list[FileText]:
        """Read files concurrently; results keep the input order."""
        if not files:
            return []
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(files))) as pool:
            return list(pool.map(self.read, files))
