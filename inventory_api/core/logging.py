import json
import logging
from datetime import datetime, timezone
from typing import Optional

from inventory_api.config import Settings, get_settings

# Context passed through ``extra=`` by the request log and the stock service.
CONTEXT_FIELDS = (
    "method",
    "path",
    "status_code",
    "duration_ms",
    "client",
    "product_id",
    "quantity",
    "stock_quantity",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with any request or stock context attached."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Requests are already logged once by the timing middleware.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


__all__ = ["CONTEXT_FIELDS", "JsonFormatter", "setup_logging"]
