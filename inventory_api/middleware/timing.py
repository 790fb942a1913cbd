import logging
import time

from fastapi import Request

logger = logging.getLogger(__name__)


async def add_process_time_header(request: Request, call_next):
    """Add an X-Process-Time header and log one line per request."""
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = time.perf_counter() - start_time
    response.headers["X-Process-Time"] = "{:.6f}".format(process_time)
    logger.info(
        "%s %s - %s in %.4fs",
        request.method,
        request.url.path,
        response.status_code,
        process_time,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(process_time * 1000, 3),
        },
    )
    return response
