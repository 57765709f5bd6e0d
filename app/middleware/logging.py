import logging
import time
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and logs its outcome and latency."""

    async def dispatch(self, request: Request, call_next):
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()
        context = {"request_id": request_id, "method": request.method, "path": request.url.path}
        label = f"[{request_id}] {request.method} {request.url.path}"

        try:
            response = await call_next(request)
        except Exception as exc:
            context["duration_ms"] = round((time.time() - start_time) * 1000, 2)
            logger.error(f"{label} - ERROR", extra={**context, "error": str(exc)})
            raise

        context["duration_ms"] = round((time.time() - start_time) * 1000, 2)
        context["status_code"] = response.status_code
        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(log_level, f"{label} - {response.status_code} ({context['duration_ms']}ms)", extra=context)

        response.headers["X-Request-ID"] = request_id
        return response
