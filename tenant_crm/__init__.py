"""Multi-tenant CRM data layer with per-tenant custom fields."""

__version__ = "0.1.0"
