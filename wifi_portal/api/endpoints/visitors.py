"""
Visitor management endpoints
"""

import math
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Header, Query, Request

from wifi_portal.api.deps import check_choice, get_store, pagination
from wifi_portal.core.config import settings
from wifi_portal.core.exceptions import NotFoundError
from wifi_portal.schemas.visitor import (
    ContactChannel,
    MigrationStatus,
    VisitorRegistration,
    VisitorStatus,
    VisitorUpdate,
)
from wifi_portal.services import queries
from wifi_portal.services.visitor_service import build_patch, build_visitor_record, public_view
from wifi_portal.services.visitor_store import VisitorStore

router = APIRouter()
logger = structlog.get_logger(__name__)

MIGRATION_STATUSES = [status.value for status in MigrationStatus]
VISITOR_STATUSES = [status.value for status in VisitorStatus]
CHANNELS = [channel.value for channel in ContactChannel]


@router.post("/register", status_code=201)
async def register(
    registration: VisitorRegistration,
    request: Request,
    session_id: Optional[str] = Header(None, alias="session-id"),
    user_agent: Optional[str] = Header(None),
    accept_language: Optional[str] = Header(None),
    store: VisitorStore = Depends(get_store),
):
    """Register a portal visitor and hand back their access code"""
    record = build_visitor_record(
        registration.model_dump(exclude_none=True),
        session_id=session_id,
        ip_address=request.client.host if request.client else None,
        user_agent=user_agent,
        language=accept_language,
    )
    saved = await store.create(record)

    logger.info("✅ Visitor registered", user_id=saved["id"], storage=store.name)
    return {
        "success": True,
        "message": "Registro exitoso",
        "accessCode": saved["accessCode"],
        "userId": saved["id"],
        "userName": saved["fullName"],
        "redirectUrl": settings.REDIRECT_URL,
        "expiresIn": settings.ACCESS_DURATION,
        "storage": store.name,
    }


@router.get("/users")
async def get_users(
    page: int = 1,
    limit: Optional[int] = None,
    status: Optional[str] = None,
    migrationStatus: Optional[str] = None,
    store: VisitorStore = Depends(get_store),
):
    """Paginated visitor list, newest first"""
    check_choice(status, VISITOR_STATUSES, "status")
    check_choice(migrationStatus, MIGRATION_STATUSES, "migrationStatus")
    skip, limit = pagination(page, limit)

    query = queries.list_query(status, migrationStatus)
    total = await store.count(query)
    users = await store.find(query, skip=skip, limit=limit)

    return {
        "success": True,
        "data": [public_view(user) for user in users],
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit),
        "storage": store.name,
    }


@router.get("/users/contactable")
async def get_contactable_users(
    channel: Optional[str] = None,
    department: Optional[str] = None,
    notContactedDays: Optional[int] = Query(None, ge=0),
    store: VisitorStore = Depends(get_store),
):
    """Active visitors with at least one reachable channel"""
    check_choice(channel, CHANNELS, "channel")

    users = await store.find(queries.contactable_query(channel, department, notContactedDays))
    return {
        "success": True,
        "data": [public_view(user) for user in users],
        "count": len(users),
        "filters": {"channel": channel, "department": department, "notContactedDays": notContactedDays},
        "storage": store.name,
    }


@router.get("/users/status/{status}")
async def get_users_by_status(status: str, store: VisitorStore = Depends(get_store)):
    """Visitors in one migration-status category"""
    check_choice(status, MIGRATION_STATUSES, "status")

    users = await store.find({"migrationStatus": status})
    return {
        "success": True,
        "status": status,
        "data": [public_view(user) for user in users],
        "count": len(users),
        "storage": store.name,
    }


@router.get("/user/{user_id}")
async def get_user(user_id: str, store: VisitorStore = Depends(get_store)):
    """Get visitor by ID"""
    user = await store.find_by_id(user_id)
    if user is None:
        raise NotFoundError(resource_id=user_id)
    return {"success": True, "data": user}


@router.put("/user/{user_id}")
async def update_user(user_id: str, update: VisitorUpdate, store: VisitorStore = Depends(get_store)):
    """Patch the allow-listed fields of a visitor"""
    patch = build_patch(update.model_dump(exclude_unset=True))

    user = await store.update(user_id, patch)
    if user is None:
        raise NotFoundError(resource_id=user_id)

    logger.info("Visitor updated", user_id=user_id, fields=sorted(k for k in patch if k != "updatedAt"))
    return {"success": True, "message": "Usuario actualizado", "data": user}
