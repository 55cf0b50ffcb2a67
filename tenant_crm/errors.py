"""Service-level exceptions translated to HTTP responses by the routers."""

from __future__ import annotations


class ConflictError(Exception):
    """A write was rejected by a storage constraint (unique key, foreign key)."""
