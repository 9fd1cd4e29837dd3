"""Process-wide cached ``Config``.

The file and ``AVAXAPI_*`` environment are read once; writers
(``save_config``, ``config set/unset``) drop the cached copy.
"""

from __future__ import annotations

import threading

from avaxapi.config.loader import load_config
from avaxapi.config.schema import Config

_lock = threading.Lock()
_config: Config | None = None


def get_config(*, force_reload: bool = False) -> Config:
    """Return the cached config, loading it on first use or when ``force_reload`` is set."""
    global _config
    with _lock:
        if force_reload or _config is None:
            _config = load_config()
        return _config


def clear_config_cache() -> None:
    global _config
    with _lock:
        _config = None
