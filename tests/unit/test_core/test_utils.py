"""Tests for general utilities."""
from datetime import datetime, timezone, timedelta

import pytest

from poker.core.utils import isoformat, make_room_code, make_vote_id, to_utc


@pytest.mark.unit
class TestUtils:

    def test_room_codes_are_three_digits(self):
        for _ in range(200):
            code = make_room_code()
            assert len(code) == 3
            assert 100 <= int(code) <= 999

    def test_vote_ids_unique(self):
        assert make_vote_id() != make_vote_id()

    def test_naive_datetimes_treated_as_utc(self):
        naive = datetime(2025, 1, 1, 12, 0)
        assert to_utc(naive).tzinfo == timezone.utc

    def test_aware_datetimes_converted(self):
        aware = datetime(2025, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
        assert to_utc(aware).hour == 10

    def test_isoformat_none(self):
        assert isoformat(None) is None
