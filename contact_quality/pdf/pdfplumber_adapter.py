import csv
import io

import pdfplumber

from contact_quality.pdf.base import BasePdfExtractor


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts contact text with pdfplumber.

    Contact lists are usually laid out as tables, so pages with detected
    tables are emitted as CSV rows; other pages fall back to plain text.
    """

    engine = "pdfplumber"

    def _extract_pages(self, pdf_bytes: bytes) -> list[str]:
        with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
            return [self._page_text(page) for page in pdf.pages]

    @staticmethod
    def _page_text(page: "pdfplumber.page.Page") -> str:
        tables = page.extract_tables()
        if not tables:
            return page.extract_text() or ""
        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        for table in tables:
            for row in table:
                writer.writerow(["" if cell is None else cell for cell in row])
        return buf.getvalue()
