from typing import Any

import pymupdf

from contact_quality.pdf.base import BasePdfExtractor

TEXT_BLOCK = 0


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts contact text with PyMuPDF, one text block per line.

    Exported contact sheets and business-card scans put each contact in its
    own block (name, email and office stacked on separate lines). Flattening
    a block into a single comma-separated line keeps one contact per row for
    the analysis prompt.
    """

    engine = "pymupdf"

    def _extract_pages(self, pdf_bytes: bytes) -> list[str]:
        with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
            return ["\n".join(self._page_lines(page)) for page in doc]

    @staticmethod
    def _page_lines(page: Any) -> list[str]:
        # blocks: (x0, y0, x1, y1, text, block_no, block_type); sort=True is reading order
        lines: list[str] = []
        for block in page.get_text("blocks", sort=True):
            if block[6] != TEXT_BLOCK:
                continue
            parts = [part.strip() for part in block[4].splitlines()]
            line = ", ".join(part for part in parts if part)
            if line:
                lines.append(line)
        return lines
