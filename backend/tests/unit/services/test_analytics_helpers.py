from datetime import datetime

import pytest

from sponsorhub.services.analytics_service import months_ago


class TestMonthsAgo:

    def test_same_day(self):
        assert months_ago(datetime(2026, 9, 15, 8, 30), 6) == datetime(2026, 3, 15, 8, 30)

    def test_crosses_year(self):
        assert months_ago(datetime(2026, 2, 10), 6) == datetime(2025, 8, 10)

    @pytest.mark.parametrize("now,expected", [
        (datetime(2026, 3, 31), datetime(2026, 2, 28)),
        (datetime(2024, 3, 31), datetime(2024, 2, 29)),
        (datetime(2026, 8, 31), datetime(2026, 2, 28)),
    ])
    def test_clamps_to_month_end(self, now, expected):
        months = (now.year * 12 + now.month) - (expected.year * 12 + expected.month)
        assert months_ago(now, months) == expected
