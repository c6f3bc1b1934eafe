"""Prompt construction for a single rule check."""

from ..security.prompt_guard import sanitize_for_prompt

MAX_DOCUMENT_CHARS = 2000
MAX_RULE_CHARS = 2000


def build_rule_prompt(rule: str, document_text: str) -> str:
    """Embed the document excerpt and the rule into the rule-check instruction."""
    excerpt = sanitize_for_prompt(document_text[:MAX_DOCUMENT_CHARS])
    rule_text = sanitize_for_prompt(rule, max_length=MAX_RULE_CHARS)

    return (
        "You are checking a PDF document based on a rule.\n\n"
        f"PDF Text (first {MAX_DOCUMENT_CHARS} chars):\n"
        f"{excerpt}\n\n"
        "Rule to check:\n"
        f"{rule_text}\n\n"
        "Respond ONLY with a JSON object in this format, with exactly these keys "
        "and no other text:\n"
        "{\n"
        '  "status": "pass" or "fail" or "inconclusive",\n'
        '  "evidence": "Relevant text from the PDF",\n'
        '  "reasoning": "Brief explanation of why the rule passed/failed",\n'
        '  "confidence": 0-100\n'
        "}"
    )
