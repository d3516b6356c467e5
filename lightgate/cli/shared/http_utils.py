"""HTTP helpers for talking to a running gateway."""

from __future__ import annotations

import json
from typing import Any

import httpx

from lightgate.config.loader import load_config


def get_gateway_base_url() -> str:
    """Build gateway base URL from local config."""
    config = load_config()
    host = config.gateway.host
    if host in {"0.0.0.0", "::"}:
        host = "127.0.0.1"
    return f"http://{host}:{config.gateway.port}"


def parse_params(raw: str | None) -> list[Any]:
    """Parse the positional params argument; must be a JSON array."""
    if raw is None or not raw.strip():
        return []
    value = json.loads(raw)
    if not isinstance(value, list):
        raise ValueError("params must be a JSON array")
    return value


def post_json(url: str, payload: Any, timeout: float = 30.0) -> dict[str, Any]:
    """POST a JSON body and return the decoded JSON response."""
    try:
        response = httpx.post(url, json=payload, timeout=timeout)
    except httpx.RequestError as exc:
        raise RuntimeError(f"Gateway unavailable: {exc}") from exc
    try:
        data = response.json()
    except ValueError as exc:
        raise RuntimeError(f"{response.status_code}: non-JSON response") from exc
    if response.status_code >= 400:
        raise RuntimeError(f"{response.status_code}: {data}")
    return data
