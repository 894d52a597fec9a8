from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .models import TodoRecord, new_record


# PUBLIC_INTERFACE
class TodoIn(BaseModel):
    """
    Request body for creating or replacing a Todo item.

    Only title and done are accepted from clients; id and createdAt are
    assigned by the server and silently dropped if supplied.
    """

    model_config = ConfigDict(
        extra="ignore",
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "title": "Buy milk",
                "done": False,
            }
        },
    )

    title: str = Field(..., description="Short title for the todo item", min_length=1)
    done: bool = Field(default=False, description="Completion status flag")

    def to_record(self) -> TodoRecord:
        """Map the wire input onto an unsaved record."""
        return new_record(self.title, self.done)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 123,
                "title": "Buy milk",
                "done": False,
                "createdAt": "2025-01-25T10:15:30.123456",
            }
        },
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    title: str = Field(..., description="Short title for the todo item")
    done: bool = Field(..., description="Completion status flag")
    created_at: datetime = Field(..., alias="createdAt", description="Creation timestamp")

    @classmethod
    def from_record(cls, record: TodoRecord) -> "TodoOut":
        return cls(
            id=record["id"],
            title=record["title"],
            done=record["done"],
            created_at=record["created_at"],
        )
