"""
Mongo-style query builders shared by both storage backends
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from wifi_portal.services.normalizer import SOCIAL_PLATFORMS

# Channel -> record fields that make a visitor reachable through it
CHANNEL_FIELDS = {
    "whatsapp": ["whatsappNumber", "phone"],
    "sms": ["phone"],
    "llamada": ["phone"],
    "presencial": ["phone"],
    "email": ["email"],
    "facebook": ["facebook"],
}

CONTACT_FIELDS = ["phone", "whatsappNumber", "email"]


def present(field: str) -> Dict[str, Any]:
    """Field exists and is neither null nor empty"""
    return {field: {"$nin": [None, ""]}}


def any_present(fields) -> Dict[str, Any]:
    return {"$or": [present(field) for field in fields]}


def combine(*clauses: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    clauses = [clause for clause in clauses if clause]
    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


def list_query(status: Optional[str] = None, migration_status: Optional[str] = None) -> Dict[str, Any]:
    query = {}
    if status:
        query["status"] = status
    if migration_status:
        query["migrationStatus"] = migration_status
    return query


def contactable_query(
    channel: Optional[str] = None,
    department: Optional[str] = None,
    not_contacted_days: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Active visitors with at least one way to reach them"""
    clauses = [{"status": "active"}, any_present(CONTACT_FIELDS)]

    if channel:
        clauses.append(any_present(CHANNEL_FIELDS[channel]))
    if department:
        clauses.append({"location.department": department})
    if not_contacted_days is not None:
        cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=not_contacted_days)
        clauses.append({"$or": [
            {"lastContactAttempt": None},
            {"lastContactAttempt": {"$lt": cutoff}},
        ]})

    return combine(*clauses)


def with_social_query() -> Dict[str, Any]:
    return any_present(SOCIAL_PLATFORMS)


def created_since_query(since: datetime) -> Dict[str, Any]:
    return {"createdAt": {"$gte": since}}


def local_midnight(now: Optional[datetime] = None) -> datetime:
    """Start of the current day in the server's local timezone"""
    now = (now or datetime.now()).astimezone()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)
