"""Base class for events published by the task store.

Subscribers get the new forest together with one of these records, so a
view can tell an added task from an axis change without diffing trees.
"""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class DomainEvent(BaseModel):
    """Immutable record of something that changed.

    Attributes:
        event_id: Unique identifier for this event instance.
        occurred_at: UTC timestamp when the change was committed.
    """

    event_id: str = Field(default_factory=lambda: str(uuid4()))
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = {"frozen": True}
