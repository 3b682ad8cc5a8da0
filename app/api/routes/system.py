from fastapi import APIRouter
from fastapi.responses import JSONResponse

from infrastructure.services import NotificationServiceDep, SettingsDep

router = APIRouter(tags=["System"])


@router.get("/version")
def get_version(settings: SettingsDep):
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
def get_health(service: NotificationServiceDep):
    """Healthcheck endpoint.

    Answers 503 only when every check fails.
    """
    health = service.health_check()
    status_code = 503 if health["status"] == "unhealthy" else 200
    return JSONResponse(status_code=status_code, content=health)
