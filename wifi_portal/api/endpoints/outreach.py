"""
Outreach endpoints
"""

from fastapi import APIRouter, Depends

from wifi_portal.api.deps import get_store
from wifi_portal.schemas.visitor import ContactRequest
from wifi_portal.services import outreach_service
from wifi_portal.services.visitor_store import VisitorStore

router = APIRouter()


@router.post("/contact/{user_id}")
async def contact_user(user_id: str, contact: ContactRequest, store: VisitorStore = Depends(get_store)):
    """
    Record an outreach attempt.

    The message is composed and logged in the visitor's communication
    history with status "sent"; no delivery provider is called.
    """
    result = await outreach_service.record_attempt(
        store,
        user_id,
        channel=contact.channel,
        template=contact.template,
        message=contact.message,
        agent=contact.agent,
    )
    record, entry = result["record"], result["entry"]

    return {
        "success": True,
        "message": "Contacto registrado",
        "data": {
            "userId": user_id,
            "channel": entry["channel"],
            "message": entry["message"],
            "status": entry["status"],
            "contactAttempts": record.get("contactAttempts", 0),
            "lastContactAttempt": record.get("lastContactAttempt"),
        },
        "note": "El envío real del mensaje está pendiente de integración",
    }
