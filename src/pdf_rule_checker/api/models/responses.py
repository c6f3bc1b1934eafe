"""
Pydantic response models -- what the API returns.

Every response carries a `success` flag. Successful checks return one
RuleResultResponse per submitted rule, in submission order; failures
return ErrorResponse.
"""

from typing import Literal

from pydantic import BaseModel, Field


# =============================================================================
# RULE CHECK
# =============================================================================


class RuleResultResponse(BaseModel):
    """Verdict for a single rule."""

    rule: str
    status: Literal["pass", "fail", "inconclusive", "error"]
    evidence: str = ""
    reasoning: str = ""
    confidence: int = Field(0, ge=0, le=100)


class CheckResponse(BaseModel):
    """Returned by POST /check."""

    success: bool = True
    results: list[RuleResultResponse] = Field(default_factory=list)


# =============================================================================
# HEALTH
# =============================================================================


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "healthy"
    version: str = ""
    model: str = ""
    uptime_seconds: float = 0.0


# =============================================================================
# COMMON
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    success: bool = False
    error: str
