"""
Digeon API Response Utilities
Error envelope and small response helpers
"""
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .errors import ErrorKind, ServiceError
from .logging_config import api_logger


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def message(text: str) -> Dict:
    """Plain acknowledgement body"""
    return {"message": text}


def page(key: str, items: List, limit: int, offset: int, total: int = None) -> Dict:
    """Limit/offset list response"""
    body = {key: items, "limit": limit, "offset": offset}
    if total is not None:
        body["total"] = total
    return body


# ============================================================
# ERROR RESPONSES
# ============================================================

def error_body(text: str, error_code: str, details: Any = None) -> Dict:
    body = {
        "ok": False,
        "error": text,
        "error_code": error_code,
        "timestamp": _timestamp(),
    }
    if details is not None:
        body["details"] = details
    return body


def _validation_details(exc: RequestValidationError) -> List[Dict]:
    return [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


# ============================================================
# EXCEPTION HANDLER
# ============================================================

async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for API errors"""

    if isinstance(exc, ServiceError):
        api_logger.warning(
            f"API Error: {exc.message}",
            status_code=exc.kind.status_code,
            error_code=exc.kind.value,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.kind.status_code,
            content=error_body(exc.message, exc.kind.value, exc.details),
        )

    if isinstance(exc, RequestValidationError):
        details = _validation_details(exc)
        first = details[0]["msg"] if details else "invalid request"
        api_logger.warning(
            f"Validation Error: {first}",
            status_code=400,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=400,
            content=error_body(first, ErrorKind.VALIDATION.value, details),
        )

    if isinstance(exc, StarletteHTTPException):
        api_logger.warning(
            f"HTTP Error: {exc.detail}",
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.detail, f"HTTP_{exc.status_code}"),
            headers=getattr(exc, "headers", None),
        )

    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content=error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )
