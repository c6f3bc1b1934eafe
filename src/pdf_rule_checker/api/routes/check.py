"""
Rule Check API -- upload a PDF and a rule list, get one verdict per rule.

  POST /check   multipart: pdf (file), rules (JSON array of strings)

Validation order:
  1. pdf present                -> 400 "No PDF file uploaded"
  2. rules is a non-empty array -> 400 "Invalid rules format: ..."
  3. file within size limit     -> 413
  4. PDF readable               -> 500 "Could not read PDF file."
  5. pipeline runs              -> 200 {"success": true, "results": [...]}

Blank or non-string entries inside the rules array are not rejected here;
the pipeline reports them inline as "Invalid rule format". There is no cap
on the number of rules or their length; the prompt builder cuts long rules.
"""

import json
import logging

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from ...errors import InputError, PdfRuleCheckerError, UploadTooLargeError
from ...extraction import extract_text
from ..middleware.rate_limit import check_rate_limit
from ..middleware.upload_limit import too_large_message
from ..models.responses import CheckResponse, ErrorResponse, RuleResultResponse

logger = logging.getLogger(__name__)
router = APIRouter()

NO_PDF_MESSAGE = "No PDF file uploaded"


def parse_rules_field(raw: str | None) -> list:
    """
    Decode the JSON-encoded rules field.

    Raises:
        InputError: not JSON, not an array, or empty.
    """
    try:
        rules = json.loads(raw) if raw else []
    except json.JSONDecodeError as e:
        raise InputError(f"Invalid rules format: {e.msg}")

    if not isinstance(rules, list) or len(rules) == 0:
        raise InputError("Invalid rules format: No rules provided")

    return rules


ERROR_RESPONSES = {code: {"model": ErrorResponse} for code in (400, 413, 429, 500)}


@router.post("/check", response_model=CheckResponse, responses=ERROR_RESPONSES)
async def check_document(
    request: Request,
    pdf: UploadFile | None = File(None),
    rules: str | None = Form(None),
    _rate: None = Depends(check_rate_limit),
) -> CheckResponse:
    """Check every rule against the uploaded PDF."""
    if pdf is None or not pdf.filename:
        raise InputError(NO_PDF_MESSAGE)

    rule_list = parse_rules_field(rules)
    settings = request.app.state.settings

    try:
        data = await pdf.read()
        if len(data) > settings.max_upload_bytes:
            raise UploadTooLargeError(too_large_message(settings.max_upload_bytes))

        logger.info(f"[CheckAPI] Processing {pdf.filename!r} ({len(data)} bytes) with {len(rule_list)} rule(s)")
        text = await run_in_threadpool(extract_text, data)

        pipeline = request.app.state.pipeline_factory()
        results = await pipeline.evaluate_all(text, rule_list)
    except PdfRuleCheckerError:
        raise
    except Exception as e:
        logger.error(f"[CheckAPI] Error in /check: {e}", exc_info=True)
        raise PdfRuleCheckerError(str(e) or "Internal server error")
    finally:
        await pdf.close()

    return CheckResponse(
        success=True,
        results=[RuleResultResponse(**r.to_dict()) for r in results],
    )
