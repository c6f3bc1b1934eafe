"""
LLM client for OpenAI-compatible chat-completion endpoints (OpenRouter by default).

Features:
  - One chat completion per call, single user-role message
  - Optional JSON response format hint (response_format={"type": "json_object"})
  - Token usage and latency reported on every response
  - Timeout enforcement via the SDK client
  - No retries: callers treat any failure as final

The client is created once at startup and passed explicitly to whatever
needs it (RuleEvaluator, create_app):

    client = create_client(settings)
    response = await client.call(prompt="...", temperature=0.2, max_tokens=1000)
    response.content  # str

Failures raise LLMCallError; the message never contains the API key.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any

import openai

from ..config import Settings
from ..errors import LLMCallError

logger = logging.getLogger(__name__)

APP_TITLE = "PDF Rule Checker"
APP_REFERER = "http://localhost:3000"


# =============================================================================
# DATA MODELS
# =============================================================================


@dataclass
class TokenUsage:
    """Token usage tracking for a single LLM call."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        self.total_tokens = self.input_tokens + self.output_tokens


@dataclass
class LLMResponse:
    """Text content of the first choice plus call metadata."""

    content: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    model: str = ""
    latency_ms: float = 0.0


# =============================================================================
# LLM CLIENT
# =============================================================================


class LLMClient:
    """
    Async chat-completion client bound to one model and endpoint.

    Usage:
        client = LLMClient(api_key="...", model="openai/gpt-4o")
        response = await client.call(prompt="Check this", json_mode=True)
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str,
        timeout: float = 120.0,
        json_mode: bool = True,
        sdk_client: Any = None,
    ):
        if not api_key:
            raise ValueError("LLM API key is required")
        self._model = model
        self._base_url = base_url
        self._timeout = timeout
        self._json_mode = json_mode

        self._client = sdk_client or openai.AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
            default_headers={
                "HTTP-Referer": APP_REFERER,
                "X-Title": APP_TITLE,
            },
        )
        logger.info(
            f"[LLM] Initialized client "
            f"(model={self._model}, base_url={self._base_url}, timeout={self._timeout}s)"
        )

    async def call(
        self,
        prompt: str,
        temperature: float = 0.2,
        max_tokens: int = 1000,
        json_mode: bool | None = None,
    ) -> LLMResponse:
        """
        Make a single chat-completion call.

        Args:
            prompt: The full user message.
            temperature: Sampling temperature.
            max_tokens: Maximum output tokens.
            json_mode: Request JSON output. None uses the client default.

        Returns:
            LLMResponse with .content (may be empty if the provider sent none)

        Raises:
            LLMCallError: network, auth, or provider failure.
        """
        use_json = self._json_mode if json_mode is None else json_mode
        request: dict[str, Any] = {
            "model": self._model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        if use_json:
            request["response_format"] = {"type": "json_object"}

        start = time.time()
        try:
            completion = await self._client.chat.completions.create(**request)
        except openai.APIError as e:
            logger.error(f"[LLM] Call failed: {type(e).__name__}: {e}")
            raise LLMCallError(f"LLM request failed: {e}") from e

        latency_ms = (time.time() - start) * 1000
        content = ""
        choices = getattr(completion, "choices", None) or []
        if choices and choices[0].message is not None:
            content = choices[0].message.content or ""

        usage_data = getattr(completion, "usage", None)
        usage = TokenUsage(
            input_tokens=getattr(usage_data, "prompt_tokens", 0) or 0,
            output_tokens=getattr(usage_data, "completion_tokens", 0) or 0,
        )

        logger.debug(
            f"[LLM] {self._model}: {usage.input_tokens}in + {usage.output_tokens}out "
            f"= {usage.total_tokens}tok ({latency_ms:.0f}ms)"
        )
        return LLMResponse(
            content=content,
            usage=usage,
            model=self._model,
            latency_ms=latency_ms,
        )

    @property
    def model(self) -> str:
        return self._model


# =============================================================================
# FACTORY
# =============================================================================


def create_client(settings: Settings) -> LLMClient:
    """
    Create the process-wide LLM client from settings.

    Raises ConfigurationError when the API key is missing, so a server
    without credentials refuses to start instead of failing every rule.
    """
    api_key = settings.require_api_key()
    return LLMClient(
        api_key=api_key,
        model=settings.model,
        base_url=settings.base_url,
        timeout=settings.llm_timeout,
        json_mode=settings.json_mode,
    )
