"""
Input normalization for visitor submissions

Trims and lowercases what the portal form sends, validates email and
phone shape, and reduces pasted social profile URLs to bare handles.
"""

import re
from typing import Any, Dict, List

from wifi_portal.core.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r'^\S+@\S+\.\S+$')

PHONE_MIN_DIGITS = 8
PHONE_MAX_DIGITS = 12

SOCIAL_PLATFORMS = ("facebook", "instagram", "twitter", "linkedin")

# Each platform: its profile URL path segment on its own domain, or a leading "@"
SOCIAL_PATTERNS = {
    'facebook': [
        r'^(?:https?://)?(?:www\.|m\.|web\.)?(?:facebook|fb)\.com/([A-Za-z0-9._\-]+)',
        r'^@([A-Za-z0-9._\-]+)$',
    ],
    'instagram': [
        r'^(?:https?://)?(?:www\.)?instagram\.com/([A-Za-z0-9._]+)',
        r'^@([A-Za-z0-9._]+)$',
    ],
    'twitter': [
        r'^(?:https?://)?(?:www\.|mobile\.)?(?:twitter|x)\.com/([A-Za-z0-9_]+)',
        r'^@([A-Za-z0-9_]+)$',
    ],
    'linkedin': [
        r'^(?:https?://)?(?:[a-z]{2,3}\.)?linkedin\.com/(?:in|company)/([A-Za-z0-9_\-%]+)',
        r'^@([A-Za-z0-9_\-]+)$',
    ],
}

REQUIRED_FIELDS = {
    "fullName": "El nombre completo es requerido",
    "phone": "El teléfono es requerido",
    "email": "El email es requerido",
}

# Always set on a stored record; an update may change them but not clear them
NON_NULLABLE_UPDATE_FIELDS = ("status", "contactSuccess")


def trim_value(value: Any) -> Any:
    """Strip strings, recursively through lists and dicts"""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        return [trim_value(item) for item in value]
    if isinstance(value, dict):
        return {key: trim_value(item) for key, item in value.items()}
    return value


def _drop_empty(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None and value != ""}


def normalize_email(email: Any) -> str:
    if not email or not isinstance(email, str) or not email.strip():
        raise ValidationError(REQUIRED_FIELDS["email"], field="email")

    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Formato de email inválido", field="email")
    return email


def phone_digits(phone: str) -> str:
    return re.sub(r'\D', '', phone or "")


def validate_phone(phone: Any) -> str:
    """Return the trimmed phone if it has between 8 and 12 digits"""
    if not phone or not isinstance(phone, str) or not phone.strip():
        raise ValidationError(REQUIRED_FIELDS["phone"], field="phone")

    phone = phone.strip()
    digits = phone_digits(phone)
    if not PHONE_MIN_DIGITS <= len(digits) <= PHONE_MAX_DIGITS:
        raise ValidationError(
            f"El teléfono debe tener entre {PHONE_MIN_DIGITS} y {PHONE_MAX_DIGITS} dígitos",
            field="phone",
        )
    return phone


def extract_social_handle(value: str, platform: str) -> str:
    """
    Reduce a pasted profile URL or @handle to the bare handle.

    Input that matches none of the platform patterns is returned as given.
    """
    if not value:
        return ""

    value = value.strip()
    for pattern in SOCIAL_PATTERNS.get(platform, []):
        match = re.search(pattern, value, re.IGNORECASE)
        if match:
            return match.group(1)
    return value


def _clean_tags(tags: List[str]) -> List[str]:
    cleaned = []
    for tag in tags or []:
        tag = tag.strip() if isinstance(tag, str) else tag
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


def _normalize_common(data: Dict[str, Any]) -> Dict[str, Any]:
    for platform in SOCIAL_PLATFORMS:
        if data.get(platform):
            data[platform] = extract_social_handle(data[platform], platform)

    for key in ("employmentInterest", "skills", "contactPreference"):
        if key in data:
            data[key] = _clean_tags(data[key])

    if isinstance(data.get("location"), dict):
        data["location"] = _drop_empty(data["location"])

    return data


def normalize_registration(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Clean a registration payload and check the required contact fields.

    Raises ValidationError naming the first missing or malformed field.
    """
    data = _drop_empty(trim_value(dict(payload)))

    if not data.get("fullName"):
        raise ValidationError(REQUIRED_FIELDS["fullName"], field="fullName")
    data["phone"] = validate_phone(data.get("phone"))
    data["email"] = normalize_email(data.get("email"))

    return _normalize_common(data)


def normalize_update(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Clean a partial update; only the fields present are checked"""
    data = trim_value(dict(payload))

    if "fullName" in data and not data["fullName"]:
        raise ValidationError(REQUIRED_FIELDS["fullName"], field="fullName")
    for field in NON_NULLABLE_UPDATE_FIELDS:
        if field in data and data[field] is None:
            raise ValidationError(f"El campo {field} no puede ser nulo", field=field)
    if "phone" in data:
        data["phone"] = validate_phone(data["phone"])
    if "email" in data:
        data["email"] = normalize_email(data["email"])

    return _normalize_common(data)
