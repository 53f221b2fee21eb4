"""
Health check da API
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from portal.core.cache import cache
from portal.core.config import settings
from portal.core.dependencies import get_content_store
from portal.services.content_store import ContentStore, ContentStoreError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health Check"],
)


def _ping(store: ContentStore) -> str:
    try:
        store.fetch_by_id("healthcheck")
        return "healthy"
    except ContentStoreError as e:
        logger.error(f"Content Store indisponível: {e}")
        return "unhealthy"


@router.get(
    "/",
    status_code=status.HTTP_200_OK,
    summary="Health Check",
    description="Verifica o status da API e a conectividade com o Content Store"
)
def health_check(store: ContentStore = Depends(get_content_store)):
    """
    Health check básico da API

    Retorna:
    - Status da API
    - Status do Content Store
    - Informações de cache e rate limiting
    """
    store_status = _ping(store)

    return {
        "status": "healthy" if store_status == "healthy" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.ENVIRONMENT,
        "content_store": {
            "backend": settings.CONTENT_STORE_BACKEND,
            "status": store_status
        },
        "cache": {
            "status": "enabled" if settings.CACHE_ENABLED and cache is not None else "disabled",
            "size": len(cache) if cache is not None else 0,
            "max_size": cache.maxsize if cache is not None else 0,
            "ttl_seconds": settings.CACHE_TTL_SECONDS
        },
        "rate_limiting": {
            "enabled": settings.RATE_LIMIT_ENABLED,
            "limit_per_minute": settings.RATE_LIMIT_PER_MINUTE
        }
    }


@router.get(
    "/ready",
    summary="Readiness Check",
    description="Verifica se a API está pronta para receber requisições"
)
def readiness_check(store: ContentStore = Depends(get_content_store)):
    timestamp = datetime.now(timezone.utc).isoformat()
    if _ping(store) == "healthy":
        return {"status": "ready", "timestamp": timestamp}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "timestamp": timestamp}
    )


@router.get(
    "/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness Check",
    description="Verifica se a API está viva (usado por orquestradores como Kubernetes)"
)
def liveness_check():
    return {
        "status": "alive",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
