"""Unit tests for recipient batching and final status computation."""

from __future__ import annotations

import math

import pytest

from fanfare.core.batching import split_into_batches
from fanfare.core.status import determine_final_status
from fanfare.models.events import NotificationChannel, Recipient
from fanfare.models.records import ChannelResult, NotificationStatus


def _recipients(n: int) -> list[Recipient]:
    return [Recipient(user_id=f"u-{i}") for i in range(n)]


# ---------------------------------------------------------------------------
# Test: split_into_batches
# ---------------------------------------------------------------------------


class TestSplitIntoBatches:
    @pytest.mark.parametrize("n", [0, 1, 2, 14, 15, 16, 30, 31, 100])
    @pytest.mark.parametrize("size", [1, 2, 7, 15, 200])
    def test_batch_arithmetic(self, n: int, size: int):
        recipients = _recipients(n)
        batches = split_into_batches("corr", recipients, size)

        assert len(batches) == math.ceil(n / size)
        assert all(b.size <= size for b in batches)
        assert all(b.size == size for b in batches[:-1])
        assert [r for b in batches for r in b.recipients] == recipients

    def test_numbering_is_one_based_and_consecutive(self):
        batches = split_into_batches("corr", _recipients(7), 3)
        assert [b.batch_number for b in batches] == [1, 2, 3]
        assert [b.size for b in batches] == [3, 3, 1]

    def test_all_batches_share_correlation_id(self):
        batches = split_into_batches("corr-xyz", _recipients(5), 2)
        assert {b.correlation_id for b in batches} == {"corr-xyz"}

    def test_empty_list_gives_no_batches(self):
        assert split_into_batches("corr", [], 15) == []

    @pytest.mark.parametrize("size", [0, -1])
    def test_batch_size_below_one_rejected(self, size: int):
        with pytest.raises(ValueError):
            split_into_batches("corr", _recipients(3), size)


# ---------------------------------------------------------------------------
# Test: determine_final_status
# ---------------------------------------------------------------------------


def _result(success: bool, skipped: bool = False) -> ChannelResult:
    return ChannelResult(channel=NotificationChannel.EMAIL, success=success, skipped=skipped)


class TestDetermineFinalStatus:
    def test_all_succeeded_is_sent(self):
        assert determine_final_status([_result(True), _result(True)]) == NotificationStatus.SENT

    def test_none_succeeded_is_failed(self):
        assert determine_final_status([_result(False), _result(False)]) == NotificationStatus.FAILED

    def test_mixed_is_partial(self):
        assert determine_final_status([_result(True), _result(False)]) == NotificationStatus.PARTIAL

    def test_skipped_counts_as_failure(self):
        status = determine_final_status([_result(True), _result(False, skipped=True)])
        assert status == NotificationStatus.PARTIAL

    def test_no_channels_is_failed(self):
        assert determine_final_status([]) == NotificationStatus.FAILED

    def test_accepts_generator(self):
        assert determine_final_status(_result(True) for _ in range(3)) == NotificationStatus.SENT
