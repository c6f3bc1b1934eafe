"""
Evaluation result record -- one per submitted rule.

The shape is fixed regardless of outcome: rule, status, evidence,
reasoning, confidence. Error results use the same shape with
status="error" and confidence=0.
"""

from dataclasses import asdict, dataclass

STATUS_PASS = "pass"
STATUS_FAIL = "fail"
STATUS_INCONCLUSIVE = "inconclusive"
STATUS_ERROR = "error"

VERDICT_STATUSES = (STATUS_PASS, STATUS_FAIL, STATUS_INCONCLUSIVE)

DEFAULT_REASONING = "No reasoning provided"
INVALID_RULE_REASONING = "Invalid rule format"

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100


@dataclass
class EvaluationResult:
    """Verdict for one rule against one document."""

    rule: str
    status: str
    evidence: str = ""
    reasoning: str = DEFAULT_REASONING
    confidence: int = 0

    @classmethod
    def error(cls, rule: str, reasoning: str) -> "EvaluationResult":
        return cls(
            rule=rule,
            status=STATUS_ERROR,
            evidence="",
            reasoning=reasoning,
            confidence=0,
        )

    def to_dict(self) -> dict:
        return asdict(self)
