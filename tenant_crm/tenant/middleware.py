"""Tenant context middleware."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from ..config import settings


def resolve_tenant_id(request: Request) -> str:
    """Tenant from the request header, else the configured fallback tenant."""
    header_value = request.headers.get(settings.tenant_header, "").strip()
    return header_value or settings.fallback_tenant_id


class TenantMiddleware(BaseHTTPMiddleware):
    """Puts the resolved tenant id on ``request.state.tenant_id``.

    API requests with no resolvable tenant are refused outright.
    """

    async def dispatch(self, request: Request, call_next):
        tenant_id = resolve_tenant_id(request)
        request.state.tenant_id = tenant_id or None
        if not tenant_id and request.url.path.startswith(settings.api_prefix):
            return JSONResponse(
                {"detail": "Tenant context is not configured"}, status_code=401
            )
        response = await call_next(request)
        return response
