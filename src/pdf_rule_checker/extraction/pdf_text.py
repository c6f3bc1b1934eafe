"""
PDF text extraction -- raw upload bytes in, trimmed plain text out.

A PDF without extractable text (scanned images, blank pages) yields "".
That is a valid document, not an error. Anything pypdf cannot open raises
ExtractionError with a generic message; parser diagnostics only go to the
log.
"""

import io
import logging

from pypdf import PdfReader

from ..errors import ExtractionError

logger = logging.getLogger(__name__)

READ_ERROR_MESSAGE = "Could not read PDF file."


def extract_text(data: bytes | None) -> str:
    """
    Extract the text of every page, joined by newlines and stripped.

    Args:
        data: Raw file bytes as uploaded

    Returns:
        Document text, possibly empty

    Raises:
        ExtractionError: input missing or not a readable PDF
    """
    if not data:
        logger.error("[Extractor] PDF buffer missing")
        raise ExtractionError(READ_ERROR_MESSAGE)

    try:
        reader = PdfReader(io.BytesIO(data))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        logger.error(f"[Extractor] Error reading PDF: {type(e).__name__}: {e}")
        raise ExtractionError(READ_ERROR_MESSAGE) from e

    text = "\n".join(pages).strip()
    logger.info(f"[Extractor] Extracted {len(text)} chars from {len(pages)} page(s)")
    return text
