from __future__ import annotations

from typing import Optional, Protocol


class SettingsRepository(Protocol):
    def get(self, user_id: int) -> Optional[dict]:
        raise NotImplementedError

    def save(self, user_id: int, settings: dict) -> None:
        raise NotImplementedError
