"""Process-local config cache and per-command snapshots.

Commands that only read settings share the cached `Config`. Commands that
override settings (``lightgate serve --port ...``) take a snapshot so the
override never leaks into the cached instance.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from lightgate.config.loader import get_config_path, load_config
from lightgate.config.schema import Config

_lock = threading.RLock()
_cache: dict[Path, Config] = {}


def _resolve(config_path: Path | None) -> Path:
    return Path(config_path or get_config_path()).expanduser().resolve()


def get_config(*, config_path: Path | None = None, force_reload: bool = False) -> Config:
    """Shared config for read-only callers; loaded once per path."""
    path = _resolve(config_path)
    with _lock:
        config = _cache.get(path)
        if config is None or force_reload:
            config = _cache[path] = load_config(path)
        return config


def clear_config_cache(*, config_path: Path | None = None) -> None:
    """Drop one cached path, or everything when no path is given."""
    with _lock:
        if config_path is None:
            _cache.clear()
        else:
            _cache.pop(_resolve(config_path), None)


def gateway_config_snapshot(
    *,
    host: str | None = None,
    port: int | None = None,
    auto_start: bool | None = None,
    config_path: Path | None = None,
) -> Config:
    """Private copy of the config with gateway overrides applied; unset overrides keep file values."""
    overrides: dict[str, Any] = {
        key: value
        for key, value in (("host", host), ("port", port), ("auto_start", auto_start))
        if value is not None
    }
    snapshot = get_config(config_path=config_path).model_copy(deep=True)
    if overrides:
        snapshot.gateway = snapshot.gateway.model_copy(update=overrides)
    return snapshot
