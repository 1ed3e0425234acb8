"""Message catalog lookup for user-facing strings.

Catalogs live in ``locales/<locale>.yaml`` as nested mappings; a message id is
the dotted path into that mapping (``admin.settings.users.not-found``).
Placeholders use the ``:name`` form.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from .config import settings
from .logging import get_logger

logger = get_logger(__name__)

LOCALES_DIR = Path(__file__).parent / "locales"


@lru_cache(maxsize=8)
def load_catalog(locale: str) -> dict[str, str]:
    """Load and flatten the catalog for ``locale`` (empty if the file is missing)."""
    path = LOCALES_DIR / f"{locale}.yaml"
    try:
        with open(path, encoding="utf-8") as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Message catalog not found", locale=locale, path=str(path))
        return {}

    return _flatten(data)


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    flat: dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, f"{full_key}."))
        else:
            flat[full_key] = str(value)
    return flat


def trans(key: str, locale: str | None = None, **params: Any) -> str:
    """Translate a message id, substituting ``:name`` placeholders.

    Unknown ids are returned unchanged.
    """
    message = load_catalog(locale or settings.locale).get(key)
    if message is None:
        return key

    # Longest names first so ":email_address" is not clobbered by ":email"
    for name in sorted(params, key=len, reverse=True):
        message = message.replace(f":{name}", str(params[name]))
    return message
