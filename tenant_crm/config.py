"""CRM configuration via pydantic-settings."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class CRMSettings(BaseSettings):
    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///crm.db"
    echo_sql: bool = False
    app_title: str = "Tenant CRM"
    api_prefix: str = "/crm"
    log_level: str = "INFO"

    # Tenant resolution
    tenant_header: str = "X-Tenant-ID"
    default_tenant_id: str = ""
    dev_tenant_fallback: str = "dev_local_tenant"
    tenant_access_tokens: str = ""
    tenant_token_header: str = "X-Tenant-Token"

    model_config = {"env_prefix": "TCRM_", "env_file": ".env", "extra": "ignore"}

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() in {"prod", "production"}

    @property
    def fallback_tenant_id(self) -> str:
        """Tenant used when the request carries no tenant header."""
        public = self.default_tenant_id.strip()
        if public:
            return public
        if not self.is_production:
            return self.dev_tenant_fallback.strip()
        return ""

    @property
    def tenant_access_tokens_map(self) -> dict[str, str]:
        """Parse comma-separated tenant:token pairs."""
        mapping: dict[str, str] = {}
        if not self.tenant_access_tokens.strip():
            return mapping

        for item in self.tenant_access_tokens.split(","):
            pair = item.strip()
            if not pair or ":" not in pair:
                continue
            tenant_id, token = pair.split(":", 1)
            tenant_id = tenant_id.strip()
            token = token.strip()
            if tenant_id and token:
                mapping[tenant_id] = token
        return mapping


settings = CRMSettings()
