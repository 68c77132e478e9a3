from datetime import datetime, timezone

from fastapi import APIRouter, Request

from shelfkeeper.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request):
    settings = get_settings()
    factory = getattr(request.app.state, "gateway_factory", None)
    return {
        "status": "ok",
        "app": settings.APP_NAME,
        "environment": settings.ENVIRONMENT,
        "persistence": getattr(factory, "backend", None),
        "time": datetime.now(timezone.utc).isoformat(),
    }
