"""Every lookup table must cover every notification type."""

from __future__ import annotations

import pytest

from fanfare.channels.catalog import (
    ALL_TABLES,
    IN_APP_PRIORITIES,
    PUSH_PRIORITIES,
    TEMPLATE_NAMES,
)
from fanfare.models.events import NotificationType


class TestCatalogExhaustiveness:
    @pytest.mark.parametrize("table_name", sorted(ALL_TABLES))
    def test_table_covers_every_type(self, table_name: str):
        table = ALL_TABLES[table_name]
        missing = [t.value for t in NotificationType if t not in table]
        assert not missing, f"{table_name} is missing {missing}"

    @pytest.mark.parametrize("table_name", sorted(ALL_TABLES))
    def test_table_has_no_extra_keys(self, table_name: str):
        assert set(ALL_TABLES[table_name]) == set(NotificationType)

    def test_push_priorities_in_range(self):
        assert all(0 <= p <= 10 for p in PUSH_PRIORITIES.values())

    def test_in_app_priorities_are_known_levels(self):
        assert set(IN_APP_PRIORITIES.values()) <= {"LOW", "NORMAL", "HIGH"}

    def test_welcome_email_uses_welcome_message_template(self):
        assert TEMPLATE_NAMES[NotificationType.WELCOME_EMAIL] == "welcome_message"

    def test_there_are_seventeen_types(self):
        assert len(NotificationType) == 17
