"""
Prompt Guard - Hygiene for untrusted text embedded in rule-check prompts.

Both the extracted PDF text and the rules come from the uploader, so they
are treated as data, never as instructions.

Two functions:
  detect_injection_attempt() -- Scans for known injection patterns (logs, doesn't block)
  sanitize_for_prompt()      -- Null byte / control character removal, hard length cap

Reference: OWASP LLM Top 10 (2025) - LLM01: Prompt Injection
"""

import logging
import re

logger = logging.getLogger(__name__)

INJECTION_PATTERNS = [
    r"ignore\s+(all\s+)?previous\s+instructions",
    r"you\s+are\s+now\s+a",
    r"forget\s+(all\s+)?(your|previous)\s+instructions",
    r"respond\s+with\s+[\"']?status[\"']?\s*[:=]\s*[\"']?pass",
    r"mark\s+(this|every|all)\s+rules?\s+as\s+pass(ed)?",
    r"<\|im_start\|>",
    r"<\|im_end\|>",
    r"\[INST\]",
    r"<\|system\|>",
    r"override\s+safety",
    r"jailbreak",
]

# Keeps \t, \n and \r; drops the rest of the C0 range and DEL.
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def detect_injection_attempt(text: str, source: str = "input") -> list[str]:
    """
    Detect potential prompt injection patterns in untrusted text.

    Returns the matched patterns (empty = clean). Does NOT block: the
    evaluator logs the finding and still checks the rule, since a document
    that talks about instructions is not necessarily hostile.

    Args:
        text: Text to scan (extracted PDF text or a rule)
        source: Label used in the log line

    Returns:
        List of matched patterns (empty if clean)
    """
    if not text:
        return []

    findings = []
    text_lower = text.lower()

    for pattern in INJECTION_PATTERNS:
        if re.search(pattern, text_lower):
            findings.append(pattern)

    if findings:
        logger.warning(
            f"[PromptGuard] Detected {len(findings)} potential injection pattern(s) "
            f"in {source} ({len(text)} chars)"
        )

    return findings


def sanitize_for_prompt(content: str, max_length: int | None = None) -> str:
    """
    Sanitize untrusted content for inclusion in an LLM prompt.

    - Removes null bytes and other control characters PDF extraction
      sometimes leaves behind
    - Cuts to exactly max_length characters when given (no marker appended)
    - Does NOT remove injection patterns (that would alter the document)
    """
    if not content:
        return ""

    content = _CONTROL_CHARS.sub("", content)

    if max_length is not None and len(content) > max_length:
        content = content[:max_length]

    return content
