from datetime import datetime, timezone

from fastapi import APIRouter, Request

HEALTH_PATH = "/health"

router = APIRouter(tags=["Health"])


@router.get(HEALTH_PATH)
def health_check(request: Request):
    settings = request.app.state.settings
    return {
        "success": True,
        "message": "API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
    }
