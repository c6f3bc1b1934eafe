"""Rule evaluation -- prompt, LLM call, verdict parsing, sequential pipeline."""
from .evaluator import RuleEvaluator
from .models import EvaluationResult
from .pacing import FixedIntervalPacer, NoopPacer, Pacer
from .parsing import ParsedVerdict, ParseFailure, parse_verdict
from .pipeline import EvaluationPipeline
