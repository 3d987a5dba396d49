"""
Aggregate statistics over visitor records
"""

from datetime import datetime
from typing import Any, Dict, Optional

from wifi_portal.services import queries
from wifi_portal.services.visitor_store import VisitorStore

TOP_DEPARTMENTS = 10
UNSPECIFIED = "no_especificado"


def success_rate(successful: int, contacted: int) -> float:
    """Percentage of contacted visitors marked successful, one decimal"""
    if not contacted:
        return 0
    return round(successful / contacted * 100, 1)


async def collect_stats(store: VisitorStore, now: Optional[datetime] = None) -> Dict[str, Any]:
    total = await store.count()
    today = await store.count(queries.created_since_query(queries.local_midnight(now)))
    with_social = await store.count(queries.with_social_query())

    by_migration = {
        (key or UNSPECIFIED): count
        for key, count in await store.count_by("migrationStatus")
    }
    by_department = [
        {"department": key, "count": count}
        for key, count in await store.count_by(
            "location.department",
            queries.present("location.department"),
            limit=TOP_DEPARTMENTS,
        )
    ]

    contacted_query = {"contactAttempts": {"$gt": 0}}
    contacted = await store.count(contacted_query)
    successful = await store.count(queries.combine(contacted_query, {"contactSuccess": True}))

    return {
        "totalUsers": total,
        "todayUsers": today,
        "withSocialMedia": with_social,
        "byMigrationStatus": by_migration,
        "byDepartment": by_department,
        "outreach": {
            "contacted": contacted,
            "successful": successful,
            "successRate": success_rate(successful, contacted),
        },
    }
