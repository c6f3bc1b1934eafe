"""
Parse and validate untrusted model output into a verdict.

parse_verdict() never raises. It returns either a ParsedVerdict with
normalized, typed fields or a ParseFailure carrying a diagnostic message
that the evaluator reports as the rule's reasoning.
"""

import json
import math
import re
from dataclasses import dataclass

from .models import (
    DEFAULT_REASONING,
    MAX_CONFIDENCE,
    MIN_CONFIDENCE,
    VERDICT_STATUSES,
    EvaluationResult,
)


@dataclass(frozen=True)
class ParsedVerdict:
    status: str
    evidence: str
    reasoning: str
    confidence: int

    ok = True

    def to_result(self, rule: str) -> EvaluationResult:
        return EvaluationResult(
            rule=rule,
            status=self.status,
            evidence=self.evidence,
            reasoning=self.reasoning,
            confidence=self.confidence,
        )


@dataclass(frozen=True)
class ParseFailure:
    message: str

    ok = False


_FENCED = re.compile(r"\s*```(?:json)?[ \t]*\n?(.*?)\s*```\s*", re.DOTALL | re.IGNORECASE)


def strip_code_fences(content: str) -> str:
    """Remove a markdown fence some models wrap around JSON despite instructions.

    Only a fence enclosing the whole reply is removed; backticks inside the
    JSON (quoted evidence, for instance) are left alone.
    """
    match = _FENCED.fullmatch(content)
    if match:
        return match.group(1).strip()
    return content.strip()


def coerce_confidence(value: object) -> int:
    """Coerce a reported confidence to an int in [0, 100]; 0 when unusable."""
    if value is None or isinstance(value, bool):
        return MIN_CONFIDENCE

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip().rstrip("%"))
        except ValueError:
            return MIN_CONFIDENCE
    else:
        return MIN_CONFIDENCE

    if not math.isfinite(number):
        return MIN_CONFIDENCE

    return max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, int(round(number))))


def _text_field(value: object, default: str) -> str:
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value
    return str(value)


def parse_verdict(content: str) -> ParsedVerdict | ParseFailure:
    """
    Turn raw completion text into a verdict.

    Steps: strip fences, decode JSON, require an object whose "status" is
    one of pass/fail/inconclusive, then default and clamp the other fields.
    """
    try:
        data = json.loads(strip_code_fences(content))
    except json.JSONDecodeError:
        return ParseFailure(f"Invalid JSON response: {content}")

    if not isinstance(data, dict):
        return ParseFailure(f"Invalid JSON response: expected an object, got {type(data).__name__}")

    status = data.get("status")
    if status not in VERDICT_STATUSES:
        return ParseFailure(f"Invalid status: {status}")

    return ParsedVerdict(
        status=status,
        evidence=_text_field(data.get("evidence"), ""),
        reasoning=_text_field(data.get("reasoning"), DEFAULT_REASONING),
        confidence=coerce_confidence(data.get("confidence")),
    )
