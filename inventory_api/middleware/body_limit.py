import logging

from fastapi import HTTPException, status
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from inventory_api.core.responses import error_response

logger = logging.getLogger(__name__)

BODY_TOO_LARGE = "Request body too large"


class BodySizeLimitMiddleware:
    """Rejects request bodies larger than ``max_body_bytes``.

    A declared Content-Length over the limit is refused before the app runs;
    chunked bodies are counted as they are read.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            try:
                declared = int(content_length)
            except ValueError:
                response = error_response(status.HTTP_400_BAD_REQUEST, "Invalid Content-Length header")
                await response(scope, receive, send)
                return
            if declared > self.max_body_bytes:
                logger.warning("Rejected %s byte body on %s", declared, scope.get("path"))
                response = error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, BODY_TOO_LARGE)
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=BODY_TOO_LARGE,
                    )
            return message

        await self.app(scope, limited_receive, send)
