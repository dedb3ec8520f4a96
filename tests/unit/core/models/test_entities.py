"""Tests for the per-run data model."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from tests.conftest import channel_item, video_item
from tubepilot.core.models.entities import (
    ChannelCandidate,
    Credential,
    PipelineResult,
    PlaylistRef,
    RunOutcome,
    VideoCandidate,
    WatchBudget,
    mask_token,
)

# ============================================================================
# CREDENTIAL TESTS
# ============================================================================


class TestCredential:
    """Tests for Credential."""

    def test_repr_masks_tokens(self):
        """Test tokens never appear in full in the repr."""
        credential = Credential(access_token="ya29.secret-access", refresh_token="1//secret-refresh")

        text = repr(credential)

        assert "secret-access" not in text
        assert "secret-refresh" not in text
        assert "ya29.sec..." in text

    def test_is_complete(self):
        assert Credential("a", "r").is_complete
        assert not Credential("a", "").is_complete
        assert not Credential("", "r").is_complete

    def test_is_immutable(self):
        credential = Credential("a", "r")
        with pytest.raises(AttributeError):
            credential.access_token = "b"  # type: ignore[misc]

    def test_mask_empty_token(self):
        assert mask_token("") == "none"


# ============================================================================
# CANDIDATE TESTS
# ============================================================================


class TestVideoCandidate:
    """Tests for VideoCandidate.from_search_item."""

    def test_from_search_item(self):
        candidate = VideoCandidate.from_search_item(video_item("abc123", "Opening traps"))

        assert candidate.video_id == "abc123"
        assert candidate.title == "Opening traps"

    def test_missing_video_id(self):
        """Test items without id.videoId produce a candidate with no ID."""
        assert VideoCandidate.from_search_item({"id": {"kind": "youtube#video"}}).video_id is None
        assert VideoCandidate.from_search_item({"snippet": {"title": "x"}}).video_id is None
        assert VideoCandidate.from_search_item({"id": "not-a-dict"}).video_id is None

    def test_missing_snippet(self):
        candidate = VideoCandidate.from_search_item({"id": {"videoId": "abc"}})

        assert candidate.title == ""


class TestChannelCandidate:
    """Tests for ChannelCandidate.from_search_item."""

    def test_reads_snippet_channel_id(self):
        assert ChannelCandidate.from_search_item(channel_item("UC1")) == ChannelCandidate("UC1")

    def test_falls_back_to_id_channel_id(self):
        item = {"id": {"kind": "youtube#channel", "channelId": "UC2"}, "snippet": {}}

        assert ChannelCandidate.from_search_item(item) == ChannelCandidate("UC2")

    def test_no_channel_id(self):
        assert ChannelCandidate.from_search_item(channel_item(None)) is None


# ============================================================================
# WATCH BUDGET TESTS
# ============================================================================


class TestWatchBudget:
    """Tests for WatchBudget."""

    def test_accumulates(self):
        budget = WatchBudget(limit_ms=1000)

        budget.add(300)
        budget.add(200)

        assert budget.accumulated_ms == 500
        assert not budget.exhausted

    def test_exhausted_at_limit(self):
        """Test reaching the limit exactly exhausts the budget."""
        budget = WatchBudget(limit_ms=1000)

        budget.add(1000)

        assert budget.exhausted

    def test_overshoot(self):
        budget = WatchBudget(limit_ms=1000)

        budget.add(1500)

        assert budget.exhausted

    def test_zero_keeps_budget(self):
        budget = WatchBudget(limit_ms=1000)

        budget.add(0)

        assert budget.accumulated_ms == 0

    def test_negative_rejected(self):
        budget = WatchBudget(limit_ms=1000)

        with pytest.raises(ValueError):
            budget.add(-1)
        assert budget.accumulated_ms == 0


# ============================================================================
# RESULT TESTS
# ============================================================================


class TestPlaylistRef:
    def test_resolved(self):
        assert not PlaylistRef(title="My chess Playlist").resolved
        assert PlaylistRef(title="My chess Playlist", id="PL1").resolved


class TestPipelineResult:
    """Tests for PipelineResult."""

    def test_duration_before_finish(self):
        result = PipelineResult(topic="chess", outcome=RunOutcome.COMPLETED, budget=WatchBudget(1))

        assert result.duration_s == 0.0

    def test_duration(self):
        started = datetime(2024, 1, 1, tzinfo=UTC)
        result = PipelineResult(
            topic="chess",
            outcome=RunOutcome.COMPLETED,
            budget=WatchBudget(1),
            started_at=started,
            finished_at=started + timedelta(seconds=90),
        )

        assert result.duration_s == 90.0

    def test_outcome_values(self):
        assert RunOutcome.COMPLETED.value == "completed"
        assert RunOutcome.BUDGET_EXHAUSTED.value == "budget_exhausted"
        assert isinstance(RunOutcome.COMPLETED, str)
