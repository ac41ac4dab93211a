"""
HTTP middleware for the Resume Assistant API.

Every response carries an X-Request-ID. Failures are returned as

    {"success": false, "timestamp", "request_id", "status_code",
     "error": "<human readable message>", ...structured extras}

where ``error`` is always a string the browser client can show as-is.
"""
import uuid
from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from pydantic import ValidationError

from resume_assistant.utils.exceptions import ResumeAssistantError, map_to_http_exception
from resume_assistant.utils.logging_config import PerformanceMonitor, get_logger
from resume_assistant.utils.utils import MAX_UPLOAD_BYTES

logger = get_logger(__name__)


def _request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = request.state.request_id = str(uuid.uuid4())
    return request_id


def error_response(request_id: str, status_code: int, error: str, **extra: Any) -> JSONResponse:
    body = {
        "success": False,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "request_id": request_id,
        "status_code": status_code,
        "error": error,
        **extra,
    }
    return JSONResponse(status_code=status_code, content=body, headers={"X-Request-ID": request_id})


class ExceptionHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions raised by the routers into the error body above"""

    async def dispatch(self, request: Request, call_next):
        request_id = _request_id(request)
        route = f"{request.method} {request.url.path}"

        try:
            response = await call_next(request)
        except ResumeAssistantError as exc:
            http_exc = map_to_http_exception(exc)
            # 4xx at WARNING, 5xx at ERROR
            log = logger.warning if http_exc.status_code < 500 else logger.error
            log(
                f"{route} -> {http_exc.status_code} {exc.error_code}: {exc.message}",
                extra={"request_id": request_id, "error_code": exc.error_code, "details": exc.details},
            )
            return error_response(request_id, http_exc.status_code, **http_exc.detail)
        except ValidationError as exc:
            # Raised while building a response model from model output
            logger.error(f"{route} -> 400 response validation: {exc}", extra={"request_id": request_id})
            return error_response(
                request_id,
                400,
                "Data validation failed",
                validation_errors=exc.errors(include_url=False, include_context=False),
            )
        except Exception as exc:
            logger.error(
                f"{route} -> 500 unhandled {exc.__class__.__name__}: {exc}",
                extra={"request_id": request_id},
                exc_info=True,
            )
            return error_response(request_id, 500, "Internal server error")

        response.headers["X-Request-ID"] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One line in, one line out. Upload bodies are never logged, only their declared size."""

    async def dispatch(self, request: Request, call_next):
        request_id = _request_id(request)
        content_type = request.headers.get("content-type", "")
        declared = request.headers.get("content-length")

        context = {
            "request_id": request_id,
            "client_ip": request.client.host if request.client else "unknown",
            "content_type": content_type.split(";", 1)[0] or None,
            "content_length": int(declared) if declared and declared.isdigit() else None,
        }
        if content_type.startswith("multipart/form-data") and context["content_length"] is not None:
            # Includes the multipart framing, so slightly above the file size
            over = context["content_length"] > MAX_UPLOAD_BYTES
            logger.info(
                f"Upload {request.method} {request.url.path}: {context['content_length']} bytes declared"
                f"{' (over the upload limit)' if over else ''}",
                extra=context,
            )
        else:
            logger.debug(f"{request.method} {request.url.path}", extra=context)

        response = await call_next(request)
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={"request_id": request_id, "status_code": response.status_code},
        )
        return response


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Warns on requests slower than the threshold and reports X-Processing-Time"""

    def __init__(self, app, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next):
        with PerformanceMonitor(
            f"{request.method} {request.url.path}",
            logger,
            threshold_ms=self.slow_request_threshold * 1000,
        ) as monitor:
            response = await call_next(request)

        response.headers["X-Processing-Time"] = f"{monitor.elapsed_ms / 1000:.3f}"
        return response
