"""
Outreach message templates and contact history entries

Contact attempts are only recorded. Nothing is sent to the visitor; a
delivery provider would plug in where ``record_attempt`` builds the entry.
"""

from datetime import datetime
from typing import Any, Dict, Optional

import structlog

from wifi_portal.core.exceptions import NotFoundError, ValidationError
from wifi_portal.schemas.visitor import ContactChannel
from wifi_portal.services.visitor_service import utcnow
from wifi_portal.services.visitor_store import VisitorStore

logger = structlog.get_logger(__name__)

DEFAULT_TEMPLATE = "bienvenida"
DEFAULT_AGENT = "sistema"

MESSAGE_TEMPLATES = {
    "bienvenida": (
        "Hola {name}, gracias por conectarte a nuestra red WiFi. "
        "Queremos acompañarte en tu proceso de reintegración. "
        "Responde a este mensaje si necesitas apoyo."
    ),
    "empleo": (
        "Hola {name}, tenemos nuevas oportunidades de empleo que pueden "
        "interesarte. ¿Te gustaría recibir más información?"
    ),
    "capacitacion": (
        "Hola {name}, se abrieron inscripciones para talleres de capacitación "
        "gratuitos en tu comunidad. ¿Quieres que te reservemos un lugar?"
    ),
    "seguimiento": (
        "Hola {name}, queremos saber cómo estás y si podemos ayudarte en algo más."
    ),
    "apoyo": (
        "Hola {name}, contamos con programas de apoyo en salud, vivienda y "
        "asesoría legal. Escríbenos para orientarte."
    ),
}

VALID_CHANNELS = [channel.value for channel in ContactChannel]


def first_name(full_name: Optional[str]) -> str:
    parts = (full_name or "").split()
    return parts[0] if parts else ""


def compose_message(full_name: str, template: Optional[str] = None, message: Optional[str] = None) -> str:
    """
    Pick the message body: a named template, else the free text, else the
    welcome template. Templates get the recipient's first name.
    """
    if template and template in MESSAGE_TEMPLATES:
        body = MESSAGE_TEMPLATES[template]
    elif message and message.strip():
        body = message.strip()
    else:
        body = MESSAGE_TEMPLATES[DEFAULT_TEMPLATE]
    return body.replace("{name}", first_name(full_name))


def validate_channel(channel: Optional[str]) -> str:
    channel = (channel or "").strip().lower()
    if channel not in VALID_CHANNELS:
        raise ValidationError(
            f"Canal inválido. Canales válidos: {', '.join(VALID_CHANNELS)}",
            field="channel",
        )
    return channel


async def record_attempt(
    store: VisitorStore,
    record_id: str,
    channel: str,
    template: Optional[str] = None,
    message: Optional[str] = None,
    agent: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Append a "sent" entry to the visitor's history and return the updated record"""
    channel = validate_channel(channel)

    record = await store.find_by_id(record_id)
    if record is None:
        raise NotFoundError(resource_id=record_id)

    now = now or utcnow()

    entry = {
        "date": now,
        "channel": channel,
        "message": compose_message(record.get("fullName"), template, message),
        "response": None,
        "agent": (agent or "").strip() or DEFAULT_AGENT,
        "status": "sent",
    }

    updated = await store.record_contact(record_id, entry, now)
    if updated is None:
        raise NotFoundError(resource_id=record_id)

    logger.info("📨 Contact attempt recorded",
                user_id=record_id,
                channel=channel,
                attempts=updated.get("contactAttempts"),
                storage=store.name)
    return {"record": updated, "entry": entry}
