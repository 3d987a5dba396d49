"""
Request dependencies
"""

from fastapi import Depends, Request

from wifi_portal.core.config import settings
from wifi_portal.core.exceptions import ValidationError
from wifi_portal.services.visitor_store import StoreProvider, VisitorStore


def get_store_provider(request: Request) -> StoreProvider:
    return request.app.state.store_provider


def get_store(provider: StoreProvider = Depends(get_store_provider)) -> VisitorStore:
    """Storage backend for this request, chosen from the current connection state"""
    return provider.active()


def pagination(page: int, limit: int = None):
    """Validate page/limit and return (skip, limit)"""
    limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
    if page < 1:
        raise ValidationError("El parámetro page debe ser mayor o igual a 1", field="page")
    if limit < 1:
        raise ValidationError("El parámetro limit debe ser mayor o igual a 1", field="limit")
    limit = min(limit, settings.MAX_PAGE_SIZE)
    return (page - 1) * limit, limit


def check_choice(value, choices, field: str):
    """Reject a query/path value outside a fixed enumeration"""
    if value is not None and value not in choices:
        raise ValidationError(f"Valor inválido para {field}. Valores válidos: {', '.join(choices)}", field=field)
