from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Todo:
    todo_id: int
    user_id: int
    text: str
    completed: bool = False
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": str(self.todo_id),
            "userId": str(self.user_id),
            "text": self.text,
            "completed": self.completed,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
