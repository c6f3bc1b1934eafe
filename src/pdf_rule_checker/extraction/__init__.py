"""PDF text extraction."""
from .pdf_text import extract_text
