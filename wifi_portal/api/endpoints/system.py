"""
Health endpoint
"""

from fastapi import APIRouter, Depends

from wifi_portal.api.deps import get_store_provider
from wifi_portal.core.config import settings
from wifi_portal.services.visitor_service import utcnow
from wifi_portal.services.visitor_store import StoreProvider

router = APIRouter()


@router.get("/health")
async def health_check(provider: StoreProvider = Depends(get_store_provider)):
    """Liveness plus which storage backend requests are using"""
    connected = provider.durable_connected
    return {
        "success": True,
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "database": "connected" if connected else "disconnected",
        "storage": provider.active().name,
        "memoryRecords": len(provider.fallback),
        "timestamp": utcnow(),
    }
