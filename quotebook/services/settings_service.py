from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from quotebook.data.defaults import DEFAULT_SETTINGS
from quotebook.models.settings import CompanySettings
from quotebook.services import numbering

logger = logging.getLogger(__name__)

SETTINGS_ENV = "QUOTEBOOK_SETTINGS"


# ---------- Utils JSON ----------
def _load_json(path: os.PathLike | str):
    p = Path(path)
    if not p.exists():
        return None
    try:
        return json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Lecture impossible de %s (%s), valeurs par défaut", p, e)
        return None


def load_settings(path: Optional[os.PathLike | str] = None) -> CompanySettings:
    """
    Charge la configuration entreprise depuis un JSON.
    - path explicite, sinon $QUOTEBOOK_SETTINGS, sinon valeurs par défaut
    - clés absentes du fichier -> valeurs par défaut
    """
    path = path or os.environ.get(SETTINGS_ENV)
    if not path:
        return DEFAULT_SETTINGS
    data = _load_json(path)
    if not isinstance(data, dict):
        return DEFAULT_SETTINGS
    try:
        return CompanySettings.model_validate({**DEFAULT_SETTINGS.model_dump(), **data})
    except ValidationError as e:
        logger.warning("Configuration invalide dans %s: %s", path, e)
        return DEFAULT_SETTINGS


class SettingsService:
    """Détient la configuration courante; les compteurs avancent sous verrou."""

    def __init__(self, settings: Optional[CompanySettings] = None) -> None:
        self._lock = threading.Lock()
        self._settings = settings or load_settings()

    @property
    def settings(self) -> CompanySettings:
        return self._settings

    def update(self, **changes: Any) -> CompanySettings:
        with self._lock:
            merged = {**self._settings.model_dump(), **changes}
            self._settings = CompanySettings.model_validate(merged)
        return self._settings

    def replace(self, settings: CompanySettings) -> None:
        with self._lock:
            self._settings = settings

    def advance_quote_counter(self) -> CompanySettings:
        with self._lock:
            self._settings = numbering.advance_quote_counter(self._settings)
        return self._settings

    def advance_invoice_counter(self) -> CompanySettings:
        with self._lock:
            self._settings = numbering.advance_invoice_counter(self._settings)
        return self._settings
