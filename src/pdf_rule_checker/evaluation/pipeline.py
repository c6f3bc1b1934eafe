"""
EvaluationPipeline -- sequential per-rule driver.

Guarantees one result per input rule, in input order. Rules are checked
one at a time (never overlapping LLM calls within a request) and each
call is admitted by the pacer. A failing rule yields an error result and
the batch continues.
"""

import logging
from collections import Counter
from typing import Sequence

from ..errors import InputError
from ..security.prompt_guard import detect_injection_attempt
from .evaluator import RuleEvaluator
from .models import INVALID_RULE_REASONING, EvaluationResult
from .pacing import NoopPacer, Pacer
from .prompts import MAX_DOCUMENT_CHARS

logger = logging.getLogger(__name__)


class EvaluationPipeline:
    """
    Usage:
        pipeline = EvaluationPipeline(evaluator, pacer=FixedIntervalPacer(0.5))
        results = await pipeline.evaluate_all(text, ["Has a signature", "Dated 2024"])
    """

    def __init__(self, evaluator: RuleEvaluator, pacer: Pacer | None = None):
        self.evaluator = evaluator
        self.pacer = pacer or NoopPacer()

    async def evaluate_all(
        self, document_text: str, rules: Sequence[object]
    ) -> list[EvaluationResult]:
        """
        Evaluate every rule against the document text.

        Raises:
            InputError: text is not a string, or rules is not a non-empty list.
        """
        if not isinstance(document_text, str):
            raise InputError("Invalid text input")
        if not isinstance(rules, (list, tuple)) or len(rules) == 0:
            raise InputError("No rules provided")

        logger.info(f"[Pipeline] Evaluating {len(rules)} rule(s) against {len(document_text)} chars")
        detect_injection_attempt(document_text[:MAX_DOCUMENT_CHARS], source="document text")
        self.pacer.reset()
        results: list[EvaluationResult] = []

        for rule in rules:
            if not isinstance(rule, str) or not rule.strip():
                results.append(EvaluationResult.error(str(rule or ""), INVALID_RULE_REASONING))
                continue

            try:
                await self.pacer.acquire()
                result = await self.evaluator.evaluate(rule, document_text)
            except Exception as e:
                logger.error(f"[Pipeline] Unexpected error processing rule: {rule!r}: {e}", exc_info=True)
                result = EvaluationResult.error(rule, f"Unexpected error: {e}")
            results.append(result)

        counts = Counter(r.status for r in results)
        logger.info(
            "[Pipeline] Done: " + ", ".join(f"{status}={n}" for status, n in sorted(counts.items()))
        )
        return results
