"""
CSV export endpoints
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from wifi_portal.api.deps import check_choice, get_store
from wifi_portal.api.endpoints.visitors import CHANNELS, MIGRATION_STATUSES, VISITOR_STATUSES
from wifi_portal.services import queries
from wifi_portal.services.csv_export import CONTACT_COLUMNS, USER_COLUMNS, export_filename, render_csv
from wifi_portal.services.visitor_store import VisitorStore

router = APIRouter()
logger = structlog.get_logger(__name__)


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content.encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/csv")
async def export_csv(
    status: Optional[str] = None,
    migrationStatus: Optional[str] = None,
    store: VisitorStore = Depends(get_store),
):
    """All visitors (optionally filtered) as CSV"""
    check_choice(status, VISITOR_STATUSES, "status")
    check_choice(migrationStatus, MIGRATION_STATUSES, "migrationStatus")

    users = await store.find(queries.list_query(status, migrationStatus))
    logger.info("📄 CSV export", rows=len(users), storage=store.name)
    return _csv_response(render_csv(users, USER_COLUMNS), export_filename("usuarios_wifi"))


@router.get("/contacts")
async def export_contacts(
    channel: Optional[str] = None,
    department: Optional[str] = None,
    store: VisitorStore = Depends(get_store),
):
    """Contactable visitors, contact columns only"""
    check_choice(channel, CHANNELS, "channel")

    users = await store.find(queries.contactable_query(channel, department))
    logger.info("📄 Contacts export", rows=len(users), storage=store.name)
    return _csv_response(render_csv(users, CONTACT_COLUMNS), export_filename("contactos"))
