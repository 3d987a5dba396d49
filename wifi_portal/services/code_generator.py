"""
Access code and session id generation
"""

import secrets
import string
import time

ACCESS_CODE_PREFIX = "WIFI-"
ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits
ACCESS_CODE_LENGTH = 6

_BASE36 = string.digits + string.ascii_lowercase


def generate_access_code() -> str:
    """
    Generate the code shown to a visitor after registering.

    Uniqueness is not checked against stored records.
    """
    suffix = "".join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(ACCESS_CODE_LENGTH))
    return f"{ACCESS_CODE_PREFIX}{suffix}"


def generate_session_id() -> str:
    """Session id for clients that do not send one: epoch millis plus a random suffix"""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    return f"{millis}-{suffix}"
