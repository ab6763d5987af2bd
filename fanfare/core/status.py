"""Final status of a recipient from its per-channel results."""

from __future__ import annotations

from typing import Iterable

from fanfare.models.records import ChannelResult, NotificationStatus


def determine_final_status(results: Iterable[ChannelResult]) -> NotificationStatus:
    """SENT if every channel succeeded, FAILED if none did, PARTIAL otherwise.

    No results at all is FAILED: nothing was delivered.
    """
    outcomes = [r.success for r in results]
    if not outcomes or not any(outcomes):
        return NotificationStatus.FAILED
    if all(outcomes):
        return NotificationStatus.SENT
    return NotificationStatus.PARTIAL
