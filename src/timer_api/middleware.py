import logging
import time
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from .errors import format_server_error

logger = logging.getLogger(__name__)


def _request_id(request: Request) -> str:
    return f"{int(time.time() * 1000)}-{id(request)}"


def request_logger(slow_request_seconds: float) -> Callable:
    """Build an HTTP middleware that logs errors and slow requests."""

    async def log_requests(request: Request, call_next: Callable):
        start_time = time.time()
        request_id = _request_id(request)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(f"[{request_id}] {request.method} {request.url.path} - ERROR: {e} - {process_time:.2f}s")
            raise

        process_time = time.time() - start_time
        # Only log slow requests or errors
        if process_time > slow_request_seconds or response.status_code >= 400:
            logger.info(f"[{request_id}] {request.method} {request.url.path} - {response.status_code} - {process_time:.2f}s")
        return response

    return log_requests


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    request_id = _request_id(request)
    logger.error(f"[{request_id}] Unhandled exception in {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content=format_server_error())
