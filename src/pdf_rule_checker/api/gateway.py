"""
API Gateway -- FastAPI application factory.

Creates the FastAPI app with routes, middleware, error handlers and the
process-wide LLM client. Entrypoint for uvicorn:

    uvicorn pdf_rule_checker.api.gateway:create_app --factory --port 5000

or `pdf-rule-checker serve`.

Startup fails with ConfigurationError when OPENROUTER_API_KEY is missing:
a server that cannot reach the LLM must not accept uploads.

Errors are always returned as {"success": false, "error": "..."}.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import Settings, load_settings
from ..errors import PdfRuleCheckerError
from ..evaluation import EvaluationPipeline, FixedIntervalPacer, RuleEvaluator
from ..llm import create_client as create_llm_client
from .middleware.rate_limit import SlidingWindowLimiter
from .middleware.upload_limit import enforce_upload_limit
from .routes import check, health

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message},
        headers=headers,
    )


def _register_error_handlers(application: FastAPI) -> None:
    @application.exception_handler(PdfRuleCheckerError)
    async def handle_app_error(request: Request, exc: PdfRuleCheckerError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"[Gateway] {request.method} {request.url.path} failed: {exc.message}")
        headers = {"Retry-After": "60"} if exc.status_code == 429 else None
        return _error_response(exc.status_code, exc.message or "Internal server error", headers)

    @application.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        # A "pdf" part sent as a plain form field is the same as no file at all.
        if any(tuple(e.get("loc", ()))[-1:] == ("pdf",) for e in errors):
            return _error_response(400, check.NO_PDF_MESSAGE)
        first = errors[0] if errors else {}
        field_name = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        detail = first.get("msg", "invalid input")
        return _error_response(400, f"Invalid request: {field_name} {detail}".strip())

    @application.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @application.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"[Gateway] Unhandled error on {request.url.path}: {exc}", exc_info=True)
        return _error_response(500, str(exc) or "Internal server error")


def create_app(settings: Settings | None = None, llm_client=None) -> FastAPI:
    """
    Application factory -- creates and configures the FastAPI app.

    Args:
        settings: Runtime settings (loaded from the environment if None).
        llm_client: Pre-built client exposing `call()`. Tests pass a fake;
            if None, one is created from settings (requires the API key).

    Raises:
        ConfigurationError: no client given and no API key configured.
    """
    if settings is None:
        settings = load_settings()
    if llm_client is None:
        llm_client = create_llm_client(settings)

    application = FastAPI(
        title="PDF Rule Checker API",
        description="Check natural-language rules against an uploaded PDF",
        version=__version__,
    )

    # CORS must wrap the upload limit so its 413 responses carry CORS headers.
    application.middleware("http")(enforce_upload_limit)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )

    evaluator = RuleEvaluator(
        llm_client,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )

    def pipeline_factory() -> EvaluationPipeline:
        # Fresh pacer per request: pacing state is never shared across requests.
        return EvaluationPipeline(evaluator, pacer=FixedIntervalPacer(settings.pacing_interval))

    application.state.settings = settings
    application.state.llm_client = llm_client
    application.state.pipeline_factory = pipeline_factory
    application.state.rate_limiter = SlidingWindowLimiter(settings.rate_limit_per_minute)
    application.state.start_time = time.time()

    _register_error_handlers(application)
    application.include_router(health.router, tags=["Health"])
    application.include_router(check.router, tags=["Rule Check"])

    logger.info(f"[Gateway] API initialized (model={settings.model})")
    return application
