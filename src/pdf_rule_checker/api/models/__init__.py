"""Pydantic models for API response contracts."""
from .responses import (
    CheckResponse,
    ErrorResponse,
    HealthResponse,
    RuleResultResponse,
)
