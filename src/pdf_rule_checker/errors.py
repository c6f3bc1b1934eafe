"""
Error taxonomy for the rule checker.

Request-level errors (input, upload size, extraction) abort a whole request
and carry the HTTP status the gateway should answer with. Rule-level errors
(EvaluationError and its subclasses) never leave the evaluator: they are
converted into a result record with status "error".
"""


class PdfRuleCheckerError(Exception):
    """Base class. `status_code` is used by the API error handler."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(PdfRuleCheckerError):
    """Raised at startup when required settings are missing or invalid."""


class InputError(PdfRuleCheckerError):
    """Malformed or missing request fields (no file, bad rules array)."""

    status_code = 400


class UploadTooLargeError(InputError):
    status_code = 413


class ExtractionError(PdfRuleCheckerError):
    """The uploaded file could not be read as a PDF."""

    status_code = 500


class EvaluationError(PdfRuleCheckerError):
    """Per-rule failure. Internal only, never surfaced as an HTTP error."""


class LLMCallError(EvaluationError):
    """The provider call failed or returned no usable content."""


class TransportError(PdfRuleCheckerError):
    """Client-side failure talking to the server. Message is user-facing."""
