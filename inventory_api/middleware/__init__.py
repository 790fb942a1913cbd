from inventory_api.middleware.body_limit import BodySizeLimitMiddleware
from inventory_api.middleware.rate_limit import RateLimitMiddleware, build_limiter
from inventory_api.middleware.security import SecurityHeadersMiddleware
from inventory_api.middleware.timing import add_process_time_header

__all__ = [
    "BodySizeLimitMiddleware",
    "RateLimitMiddleware",
    "SecurityHeadersMiddleware",
    "add_process_time_header",
    "build_limiter",
]
