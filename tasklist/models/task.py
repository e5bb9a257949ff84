import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_task_id() -> str:
    """Fresh random 128-bit identifier; never recycled"""
    return str(uuid.uuid4())


@dataclass
class Task:
    """Task record as held by a task store"""

    title: str
    description: Optional[str] = None
    completed: bool = False
    id: str = field(default_factory=new_task_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime] = None

    def copy(self) -> "Task":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to dictionary with proper datetime handling"""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        updated_at = data.get("updated_at")
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description"),
            completed=bool(data.get("completed", False)),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(updated_at) if updated_at else None,
        )

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', completed={self.completed})>"
