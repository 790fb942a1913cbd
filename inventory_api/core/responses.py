from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    **extra: Any,
) -> JSONResponse:
    content: dict[str, Any] = {"success": True}
    if message is not None:
        content["message"] = message
    content.update(extra)
    if data is not None:
        content["data"] = data
    return JSONResponse(status_code=status_code, content=jsonable_encoder(content))


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


__all__ = ["error_response", "success_response"]
