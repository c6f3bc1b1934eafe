"""
Upload size guard -- rejects oversized bodies before the route runs.

The declared Content-Length is checked against MAX_UPLOAD_BYTES plus a
small allowance for multipart boundaries and the rules field. Requests
that pass here are checked again after the file is read, since
Content-Length can be absent with chunked transfer encoding.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MULTIPART_OVERHEAD_BYTES = 64 * 1024


def too_large_message(max_bytes: int) -> str:
    return f"File too large (limit is {max_bytes // (1024 * 1024)} MB)"


async def enforce_upload_limit(request: Request, call_next):
    """HTTP middleware: answer 413 when the declared body is too large."""
    if request.method == "POST":
        max_bytes = request.app.state.settings.max_upload_bytes
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > max_bytes + MULTIPART_OVERHEAD_BYTES:
            logger.warning(f"[UploadLimit] Rejected {declared} byte body on {request.url.path}")
            return JSONResponse(
                status_code=413,
                content={"success": False, "error": too_large_message(max_bytes)},
            )
    return await call_next(request)
