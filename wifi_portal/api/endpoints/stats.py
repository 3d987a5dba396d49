"""
Statistics endpoint
"""

from fastapi import APIRouter, Depends

from wifi_portal.api.deps import get_store
from wifi_portal.services.stats_service import collect_stats
from wifi_portal.services.visitor_store import VisitorStore

router = APIRouter()


@router.get("/stats")
async def get_stats(store: VisitorStore = Depends(get_store)):
    """Aggregate counts for the admin dashboard"""
    return {
        "success": True,
        "data": await collect_stats(store),
        "storage": store.name,
    }
