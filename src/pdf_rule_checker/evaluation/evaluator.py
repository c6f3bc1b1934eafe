"""
RuleEvaluator -- checks one rule against one document through the LLM.

evaluate() never raises. Every failure path (provider error, empty
content, unparseable JSON, invalid status, anything unexpected) comes back
as an EvaluationResult with status="error" and a "Processing error: ..."
reasoning, so a single bad rule cannot fail the batch.
"""

import logging
from typing import Protocol

from ..config import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE
from ..errors import LLMCallError
from ..llm import LLMResponse
from ..security.prompt_guard import detect_injection_attempt
from .models import EvaluationResult
from .parsing import ParseFailure, parse_verdict
from .prompts import build_rule_prompt

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """The part of LLMClient the evaluator depends on."""

    async def call(
        self,
        prompt: str,
        temperature: float = ...,
        max_tokens: int = ...,
        json_mode: bool | None = ...,
    ) -> LLMResponse: ...


class RuleEvaluator:
    """
    Usage:
        evaluator = RuleEvaluator(llm_client, temperature=0.2, max_tokens=1000)
        result = await evaluator.evaluate("Document is signed", text)
    """

    def __init__(
        self,
        llm_client: CompletionClient,
        temperature: float = DEFAULT_TEMPERATURE,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        self.llm = llm_client
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def evaluate(self, rule: str, document_text: str) -> EvaluationResult:
        try:
            return await self._evaluate(rule, document_text)
        except Exception as e:
            logger.error(f"[Evaluator] Error processing rule: {rule!r}: {e}")
            return EvaluationResult.error(rule, f"Processing error: {e}")

    async def _evaluate(self, rule: str, document_text: str) -> EvaluationResult:
        detect_injection_attempt(rule, source="rule")
        prompt = build_rule_prompt(rule, document_text)

        response = await self.llm.call(
            prompt=prompt,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        content = getattr(response, "content", None)
        if not content or not isinstance(content, str):
            raise LLMCallError("Empty response from API")

        verdict = parse_verdict(content)
        if isinstance(verdict, ParseFailure):
            logger.error(f"[Evaluator] Unusable response for rule {rule!r}: {verdict.message[:200]}")
            return EvaluationResult.error(rule, f"Processing error: {verdict.message}")

        logger.debug(
            f"[Evaluator] {rule[:60]!r} -> {verdict.status} ({verdict.confidence}%)"
        )
        return verdict.to_result(rule)
