"""Batch model — a contiguous slice of an event's recipient list."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from fanfare.models.events import Recipient


class Batch(BaseModel):
    """One unit of concurrent work.

    Ephemeral: exists only while the event is being dispatched.
    ``batch_number`` is 1-based in submission order.
    """

    model_config = ConfigDict(frozen=True)

    correlation_id: str
    batch_number: int
    recipients: list[Recipient]

    @property
    def size(self) -> int:
        return len(self.recipients)
