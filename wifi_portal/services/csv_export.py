"""
CSV rendering of visitor records

Output is UTF-8 with a leading byte-order mark so spreadsheet programs
pick the right encoding; text cells are always double quoted.
"""

import csv
import io
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Tuple

BOM = "\ufeff"

Column = Tuple[str, Callable[[Dict[str, Any]], Any]]


def _field(name: str) -> Callable[[Dict[str, Any]], Any]:
    return lambda record: record.get(name)


def _location(part: str) -> Callable[[Dict[str, Any]], Any]:
    return lambda record: (record.get("location") or {}).get(part)


def _count(name: str) -> Callable[[Dict[str, Any]], Any]:
    return lambda record: record.get(name) or 0


USER_COLUMNS: List[Column] = [
    ("ID", _field("id")),
    ("Nombre Completo", _field("fullName")),
    ("Teléfono", _field("phone")),
    ("Email", _field("email")),
    ("WhatsApp", _field("whatsappNumber")),
    ("Facebook", _field("facebook")),
    ("Instagram", _field("instagram")),
    ("Twitter", _field("twitter")),
    ("LinkedIn", _field("linkedin")),
    ("Estado Migratorio", _field("migrationStatus")),
    ("Necesita Apoyo", _field("needsSupport")),
    ("Interés Laboral", _field("employmentInterest")),
    ("Habilidades", _field("skills")),
    ("Preferencia de Contacto", _field("contactPreference")),
    ("Departamento", _location("department")),
    ("Municipio", _location("municipality")),
    ("Comunidad", _location("community")),
    ("Miembros de Familia", _field("familyMembers")),
    ("Estado", _field("status")),
    ("Intentos de Contacto", _count("contactAttempts")),
    ("Contacto Exitoso", _field("contactSuccess")),
    ("Código de Acceso", _field("accessCode")),
    ("Red WiFi", _field("wifiNetwork")),
    ("Dirección MAC", _field("macAddress")),
    ("Dirección IP", _field("ipAddress")),
    ("Fecha de Registro", _field("createdAt")),
]

CONTACT_COLUMNS: List[Column] = [
    ("Nombre Completo", _field("fullName")),
    ("Teléfono", _field("phone")),
    ("WhatsApp", _field("whatsappNumber")),
    ("Email", _field("email")),
    ("Facebook", _field("facebook")),
    ("Preferencia de Contacto", _field("contactPreference")),
    ("Horario Preferido", _field("preferredContactTime")),
    ("Departamento", _location("department")),
    ("Municipio", _location("municipality")),
    ("Último Intento", _field("lastContactAttempt")),
    ("Intentos de Contacto", _count("contactAttempts")),
]


def format_cell(value: Any) -> Any:
    """Numbers stay bare; everything else becomes text"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Sí" if value else "No"
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return "; ".join(str(item) for item in value)
    return str(value)


def render_csv(records: Iterable[Dict[str, Any]], columns: List[Column]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\r\n")
    writer.writerow([header for header, _ in columns])
    for record in records:
        writer.writerow([format_cell(getter(record)) for _, getter in columns])
    return BOM + buffer.getvalue()


def export_filename(prefix: str, now: datetime = None) -> str:
    return f"{prefix}_{(now or datetime.now()).strftime('%Y-%m-%d')}.csv"
