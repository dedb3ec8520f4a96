"""Unit tests for duration parsing."""

from __future__ import annotations

import pytest

from tubepilot.core.pipeline.duration import parse_duration_ms


class TestParseDurationMs:
    """Tests for parse_duration_ms."""

    @pytest.mark.parametrize(
        ("encoded", "expected"),
        [
            ("PT1H2M3S", 3_723_000),
            ("PT5M", 300_000),
            ("PT45S", 45_000),
            ("PT2H", 7_200_000),
            ("PT1H30S", 3_630_000),
            ("PT10M0S", 600_000),
            ("PT0S", 0),
        ],
    )
    def test_well_formed_durations(self, encoded: str, expected: int):
        """Test that each component contributes hours*3600 + minutes*60 + seconds."""
        assert parse_duration_ms(encoded) == expected

    def test_formula_holds_for_any_subset(self):
        """Test the (h*3600 + m*60 + s) * 1000 law across component subsets."""
        for h in (0, 1, 12):
            for m in (0, 7, 59):
                for s in (0, 1, 59):
                    encoded = "PT" + "".join(
                        f"{value}{unit}" for value, unit in ((h, "H"), (m, "M"), (s, "S")) if value
                    )
                    assert parse_duration_ms(encoded) == (h * 3600 + m * 60 + s) * 1000

    def test_days_component(self):
        """Test that day components are honoured."""
        assert parse_duration_ms("P1DT1H") == (24 + 1) * 3600 * 1000
        assert parse_duration_ms("P0D") == 0

    @pytest.mark.parametrize("encoded", [None, "", "   ", "PT", "P", "garbage", "1H2M", "PT1.5S", "PTxM"])
    def test_absent_or_malformed_is_zero(self, encoded):
        """Test that unknown durations are reported as 0, not an error."""
        assert parse_duration_ms(encoded) == 0

    def test_surrounding_whitespace_is_ignored(self):
        """Test that padding around a valid value is tolerated."""
        assert parse_duration_ms(" PT1M ") == 60_000
