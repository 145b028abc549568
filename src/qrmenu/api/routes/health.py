from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from qrmenu.api.services import OrderingServices, get_services
from qrmenu.infrastructure.cache.redis_cache import ping_redis

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(
    response: Response,
    services: OrderingServices = Depends(get_services),
) -> dict[str, object]:
    # Readiness follows the backend only; the catalog cache is optional.
    checks = {
        "backend": services.backend.ping(),
        "cache": ping_redis(timeout_seconds=1.0),
    }
    if checks["backend"]:
        return {"status": "ok", "checks": checks}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "unavailable", "checks": checks}
