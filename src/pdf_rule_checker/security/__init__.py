"""Security utilities -- prompt injection detection and prompt hygiene."""
from .prompt_guard import detect_injection_attempt, sanitize_for_prompt
