from __future__ import annotations

from datetime import datetime
from typing import Optional, TypedDict


# PUBLIC_INTERFACE
class TodoRecord(TypedDict):
    """
    The stored shape of a Todo item, as exchanged with persistence gateways.

    Fields:
    - id: Integer identifier, None until the record is first saved
    - title: Short title, never null
    - done: Completion flag
    - created_at: Creation timestamp, None until the record is first saved;
      set once by the gateway and never written again
    """

    id: Optional[int]
    title: str
    done: bool
    created_at: Optional[datetime]


# PUBLIC_INTERFACE
def new_record(title: str, done: bool = False) -> TodoRecord:
    """Build an unsaved TodoRecord."""
    return {"id": None, "title": title, "done": done, "created_at": None}
