"""
CheckClient -- HTTP adapter for POST /check.

Builds the multipart body (pdf file + JSON-encoded rules), decodes the
JSON response into EvaluationResult records, and maps every transport or
HTTP failure into a single TransportError with a user-facing message.
Technical detail (status lines, stack traces) is logged, never raised.

    client = CheckClient("http://localhost:5000")
    results = await client.submit("contract.pdf", ["Document is signed"])
"""

import json
import logging
from pathlib import Path

import httpx

from .errors import TransportError
from .evaluation.models import EvaluationResult
from .evaluation.parsing import coerce_confidence

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
DEFAULT_TIMEOUT_SECONDS = 60.0

GENERIC_ERROR = "An error occurred while processing your request"
STATUS_MESSAGES = {
    413: "File is too large. Please upload a smaller file.",
    400: "Invalid request. Please check your input and try again.",
    500: "Server error. Please try again later.",
}
TIMEOUT_MESSAGE = "Request timed out. Please try again."
NO_RESPONSE_MESSAGE = "No response from server. Please check your connection."
INVALID_RESPONSE_MESSAGE = "Invalid response format from server"


def _message_for_status(response: httpx.Response) -> str:
    if response.status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[response.status_code]
    try:
        body = response.json()
    except ValueError:
        return GENERIC_ERROR
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return GENERIC_ERROR


def _decode_results(response: httpx.Response) -> list[EvaluationResult]:
    try:
        body = response.json()
    except ValueError:
        raise TransportError(INVALID_RESPONSE_MESSAGE)
    if not isinstance(body, dict) or not isinstance(body.get("results"), list):
        raise TransportError(INVALID_RESPONSE_MESSAGE)

    results = []
    for item in body["results"]:
        if not isinstance(item, dict):
            raise TransportError(INVALID_RESPONSE_MESSAGE)
        results.append(EvaluationResult(
            rule=str(item.get("rule", "")),
            status=str(item.get("status", "error")),
            evidence=item.get("evidence") or "",
            reasoning=item.get("reasoning") or "",
            confidence=coerce_confidence(item.get("confidence")),
        ))
    return results


class CheckClient:
    """
    Usage:
        client = CheckClient(base_url="http://localhost:5000", timeout=60)
        results = await client.submit(Path("doc.pdf"), ["Has a signature"])
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def submit(
        self,
        pdf: str | Path | bytes | None,
        rules: list[str],
        filename: str = "document.pdf",
    ) -> list[EvaluationResult]:
        """
        Upload a PDF and rules; return one result per rule.

        Args:
            pdf: Path to the PDF, or its raw bytes.
            rules: Rule strings, sent as a JSON array.
            filename: Name reported for raw bytes.

        Raises:
            TransportError: with a message suitable for showing to the user.
        """
        if pdf is None or pdf == b"":
            raise TransportError("No PDF file provided")
        if not isinstance(rules, list) or len(rules) == 0:
            raise TransportError("No rules provided")

        try:
            if isinstance(pdf, bytes):
                content = pdf
            else:
                path = Path(pdf)
                content = path.read_bytes()
                filename = path.name

            files = {"pdf": (filename, content, "application/pdf")}
            data = {"rules": json.dumps(rules)}

            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post("/check", files=files, data=data)
                response.raise_for_status()
                return _decode_results(response)

        except TransportError:
            raise
        except httpx.HTTPStatusError as e:
            logger.error(
                f"[CheckClient] HTTP {e.response.status_code} from {self._base_url}: "
                f"{e.response.text[:200]}"
            )
            raise TransportError(_message_for_status(e.response)) from None
        except httpx.TimeoutException as e:
            logger.error(f"[CheckClient] Timeout after {self._timeout}s: {e}")
            raise TransportError(TIMEOUT_MESSAGE) from None
        except httpx.RequestError as e:
            logger.error(f"[CheckClient] No response from {self._base_url}: {e}")
            raise TransportError(NO_RESPONSE_MESSAGE) from None
        except Exception as e:
            logger.error(f"[CheckClient] Request failed: {type(e).__name__}: {e}")
            raise TransportError(str(e) or GENERIC_ERROR) from None
