"""
Visitor record assembly
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from wifi_portal.core.exceptions import ValidationError
from wifi_portal.schemas.visitor import VisitorStatus
from wifi_portal.services.code_generator import generate_access_code, generate_session_id
from wifi_portal.services.normalizer import normalize_registration, normalize_update

# Kept in storage, left out of listings
INTERNAL_FIELDS = ("deviceInfo",)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def serialize_device_info(device_info: Any, user_agent: Optional[str], language: Optional[str]) -> str:
    """Opaque snapshot of the client device, stored as a JSON string"""
    if isinstance(device_info, str) and device_info.strip():
        return device_info.strip()

    snapshot = dict(device_info or {})
    if user_agent:
        snapshot.setdefault("userAgent", user_agent)
    if language:
        snapshot.setdefault("language", language)
    return json.dumps(snapshot, ensure_ascii=False, sort_keys=True)


def build_visitor_record(
    payload: Dict[str, Any],
    session_id: Optional[str] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    language: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Turn a registration payload into a new visitor record.

    The access code, session id, timestamps and outreach counters are set
    here; the client cannot supply them.
    """
    device_info = payload.pop("deviceInfo", None)
    body_session_id = payload.pop("sessionId", None)

    data = normalize_registration(payload)
    now = now or utcnow()

    record = {
        **data,
        "sessionId": (session_id or body_session_id or "").strip() or generate_session_id(),
        "accessCode": generate_access_code(),
        "ipAddress": ip_address,
        "deviceInfo": serialize_device_info(device_info, user_agent, language),
        "status": VisitorStatus.ACTIVE.value,
        "contactAttempts": 0,
        "contactSuccess": False,
        "lastContactAttempt": None,
        "communicationHistory": [],
        "jobOpportunities": [],
        "accessDate": now,
        "createdAt": now,
        "lastAccess": now,
        "updatedAt": now,
    }
    if data.get("consentDataProcessing") or data.get("consentContact"):
        record["consentDate"] = now
    return record


def build_patch(payload: Dict[str, Any], now: Optional[datetime] = None) -> Dict[str, Any]:
    """Normalized field patch for an update; at least one field is required"""
    if not payload:
        raise ValidationError("No hay campos para actualizar")

    patch = normalize_update(payload)
    now = now or utcnow()
    if patch.get("consentDataProcessing") or patch.get("consentContact"):
        patch["consentDate"] = now
    patch["updatedAt"] = now
    return patch


def public_view(record: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in record.items() if key not in INTERNAL_FIELDS}
