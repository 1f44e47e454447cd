import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from contact_quality.workflow.models import UploadedFile


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """A single-page PDF with one contact line."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Jane Doe jane@example.com NYC VP")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """A two-page PDF with one contact per page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one contact")
    c.showPage()
    c.drawString(72, 720, "Page two contact")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF with a blank page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def contact_files() -> list[UploadedFile]:
    return [
        UploadedFile(
            name="a.csv",
            content=b"Name,Email\nJohn Smith,john@x.com",
            media_type="text/csv",
        ),
        UploadedFile(
            name="b.csv",
            content=b"Name,Email\nSmith John,bad-email",
            media_type="text/csv",
        ),
    ]
