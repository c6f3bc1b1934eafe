"""PDF text extraction."""

import pytest

from pdf_rule_checker.errors import ExtractionError
from pdf_rule_checker.extraction import extract_text


class TestExtractText:
    def test_extracts_page_text(self, signed_pdf):
        text = extract_text(signed_pdf)
        assert "Signed by J. Doe" in text
        assert text == text.strip()

    def test_blank_pdf_yields_empty_string(self, blank_pdf):
        assert extract_text(blank_pdf) == ""

    @pytest.mark.parametrize("data", [None, b""])
    def test_missing_input_rejected(self, data):
        with pytest.raises(ExtractionError):
            extract_text(data)

    def test_non_pdf_rejected_with_generic_message(self):
        with pytest.raises(ExtractionError) as exc_info:
            extract_text(b"this is plainly not a PDF document")
        assert str(exc_info.value) == "Could not read PDF file."
        assert exc_info.value.status_code == 500

    def test_truncated_pdf_rejected(self, signed_pdf):
        with pytest.raises(ExtractionError):
            extract_text(signed_pdf[:40])
