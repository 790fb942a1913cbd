import logging
import math
import time
from typing import Iterable

from fastapi import Request, status
from limits import parse
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.middleware.base import BaseHTTPMiddleware

from inventory_api.config import Settings
from inventory_api.core.responses import error_response

logger = logging.getLogger(__name__)

TOO_MANY_REQUESTS = "Too many requests, please try again later."


def build_limiter(settings: Settings) -> Limiter:
    return Limiter(
        key_func=get_remote_address,
        enabled=settings.RATE_LIMIT_ENABLED,
        storage_uri="memory://",
    )


class RateLimitMiddleware(BaseHTTPMiddleware):
    """One request ceiling per client address, shared by every route.

    Hits are counted in the limiter's storage directly, so the check does not
    depend on resolving the matched route first.
    """

    def __init__(self, app, limiter: Limiter, limit: str, exempt_paths: Iterable[str] = ()):
        super().__init__(app)
        self.limiter = limiter
        self.limit = parse(limit)
        self.exempt_paths = frozenset(exempt_paths)

    async def dispatch(self, request: Request, call_next):
        if not self.limiter.enabled or request.url.path in self.exempt_paths:
            return await call_next(request)

        client = get_remote_address(request)
        if self.limiter.limiter.hit(self.limit, client):
            return await call_next(request)

        reset_at, _remaining = self.limiter.limiter.get_window_stats(self.limit, client)
        retry_after = max(1, math.ceil(reset_at - time.time()))
        logger.warning(
            "Rate limit exceeded for %s on %s",
            client,
            request.url.path,
            extra={"client": client, "method": request.method, "path": request.url.path},
        )
        return error_response(
            status.HTTP_429_TOO_MANY_REQUESTS,
            TOO_MANY_REQUESTS,
            headers={"Retry-After": str(retry_after)},
        )


__all__ = ["RateLimitMiddleware", "build_limiter"]
