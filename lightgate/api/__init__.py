"""HTTP transport for lightgate."""

from lightgate.api.server import classify_http_status, create_app

__all__ = ["create_app", "classify_http_status"]
