"""
Portal exceptions

Every error a handler can raise maps to one HTTP status and is rendered
as ``{"success": false, "error": <message>}`` by the handlers in main.py.
"""

from typing import Any, Dict, Optional

from fastapi import status


class PortalError(Exception):
    """Base exception for all portal errors"""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(PortalError):
    """Missing or malformed input"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message=message, status_code=status.HTTP_400_BAD_REQUEST, details=details)
        self.field = field


class NotFoundError(PortalError):
    """Record lookup miss"""

    def __init__(self, message: str = "Usuario no encontrado", resource_id: Optional[str] = None):
        details = {"id": resource_id} if resource_id else {}
        super().__init__(message=message, status_code=status.HTTP_404_NOT_FOUND, details=details)


class InternalError(PortalError):
    """Store or unexpected failure"""

    def __init__(self, message: str = "Error interno del servidor", detail: Optional[str] = None):
        details = {"detail": detail} if detail else {}
        super().__init__(message=message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, details=details)
