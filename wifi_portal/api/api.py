"""
API router configuration
"""

from fastapi import APIRouter

from wifi_portal.api.endpoints import export, outreach, stats, system, visitors

# Directory returned by "/" and by unmatched routes
ENDPOINTS = {
    "health": "GET /api/health",
    "register": "POST /api/register",
    "users": "GET /api/users",
    "user": "GET /api/user/:id",
    "usersByStatus": "GET /api/users/status/:status",
    "contactable": "GET /api/users/contactable",
    "contact": "POST /api/contact/:userId",
    "updateUser": "PUT /api/user/:id",
    "stats": "GET /api/stats",
    "exportCsv": "GET /api/export/csv",
    "exportContacts": "GET /api/export/contacts",
}

api_router = APIRouter(prefix="/api")

# Include all endpoint routers
api_router.include_router(system.router, tags=["system"])
api_router.include_router(visitors.router, tags=["visitors"])
api_router.include_router(outreach.router, tags=["outreach"])
api_router.include_router(stats.router, tags=["stats"])
api_router.include_router(export.router, prefix="/export", tags=["export"])
