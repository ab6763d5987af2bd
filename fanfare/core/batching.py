"""Recipient batching."""

from __future__ import annotations

from fanfare.models.batch import Batch
from fanfare.models.events import Recipient


def split_into_batches(
    correlation_id: str, recipients: list[Recipient], batch_size: int
) -> list[Batch]:
    """Split *recipients* into consecutive batches of at most *batch_size*.

    Produces ``ceil(len(recipients) / batch_size)`` batches numbered from 1;
    only the last may be smaller.  Concatenating the batches' recipients in
    order reproduces *recipients*.

    Raises
    ------
    ValueError
        If *batch_size* is less than 1.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    return [
        Batch(
            correlation_id=correlation_id,
            batch_number=number,
            recipients=recipients[start : start + batch_size],
        )
        for number, start in enumerate(range(0, len(recipients), batch_size), start=1)
    ]
