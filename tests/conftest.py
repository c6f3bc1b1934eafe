"""Test fixtures -- mock LLM, settings, in-memory PDFs, API client."""

import io
import json

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from pdf_rule_checker.api.gateway import create_app
from pdf_rule_checker.config import Settings
from pdf_rule_checker.llm import LLMResponse

PASS_VERDICT = {
    "status": "pass",
    "evidence": "Signed by J. Doe",
    "reasoning": "Signature block found",
    "confidence": 92,
}


def make_text_pdf(text: str) -> bytes:
    """Build a valid one-page PDF whose content stream draws `text`."""
    content = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 4 0 R >> >> /Contents 5 0 R >>",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(out)


def make_blank_pdf() -> bytes:
    """One empty page -- a valid PDF with no extractable text."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def settings():
    """Settings with a dummy key, no pacing delay and no request limit."""
    return Settings(api_key="test-key", pacing_interval=0, rate_limit_per_minute=0)


@pytest.fixture
def mock_llm():
    """Mock LLM client that returns a passing verdict without API calls."""
    client = AsyncMock()
    client.call.return_value = LLMResponse(content=json.dumps(PASS_VERDICT), model="mock-model")
    return client


@pytest.fixture
def signed_pdf():
    return make_text_pdf("Signed by J. Doe")


@pytest.fixture
def blank_pdf():
    return make_blank_pdf()


@pytest.fixture
def app(settings, mock_llm):
    return create_app(settings=settings, llm_client=mock_llm)


@pytest.fixture
def api(app):
    with TestClient(app) as client:
        yield client
