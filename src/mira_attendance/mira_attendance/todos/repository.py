from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Todo


class TodoRepository(Protocol):
    def list_for_user(self, user_id: int) -> Sequence[Todo]:
        """Newest first."""

        raise NotImplementedError

    def get(self, todo_id: int) -> Optional[Todo]:
        raise NotImplementedError

    def create(self, *, user_id: int, text: str, created_at: datetime) -> int:
        raise NotImplementedError

    def update(self, todo_id: int, changes: Mapping[str, Any]) -> None:
        """changes: subset of {text, completed}."""

        raise NotImplementedError

    def delete(self, todo_id: int) -> None:
        raise NotImplementedError
