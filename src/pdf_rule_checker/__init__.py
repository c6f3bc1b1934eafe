"""PDF Rule Checker -- LLM verdicts for natural-language rules against a PDF."""

__version__ = "0.1.0"
