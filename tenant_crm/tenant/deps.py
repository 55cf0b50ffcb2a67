"""FastAPI dependencies for tenant resolution."""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Request

from ..config import settings
from .middleware import resolve_tenant_id


async def get_tenant_id(request: Request) -> str:
    """Return the tenant id for the request. Raises 401/403 if unusable."""
    tenant_id = getattr(request.state, "tenant_id", None) or resolve_tenant_id(request)
    if not tenant_id:
        raise HTTPException(status_code=401, detail="Tenant context is not configured")

    expected_token = settings.tenant_access_tokens_map.get(tenant_id)
    if expected_token:
        provided_token = request.headers.get(settings.tenant_token_header, "").strip()
        if not provided_token or not hmac.compare_digest(provided_token, expected_token):
            raise HTTPException(status_code=403, detail="Tenant access token required")

    return tenant_id
