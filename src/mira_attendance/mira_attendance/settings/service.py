from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError
from .repository import SettingsRepository


class SettingsService:
    """Per-user preferences stored as an opaque JSON object."""

    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get(self, user_id: int) -> Optional[dict]:
        return self._settings.get(int(user_id))

    def update(self, user_id: int, settings: Any) -> dict:
        if not isinstance(settings, Mapping):
            raise ValidationError("settings must be an object")
        data = dict(settings)
        self._settings.save(int(user_id), data)
        return data
