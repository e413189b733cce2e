"""Tests for cumulative snow depth tracking."""

import json

import pytest

from snowhound.analytics.depth import SnowDepthTracker, history_key
from snowhound.storage.kv_store import InMemoryStore


class TestSnowDepthTracker:
    def test_accumulates_mean_snowfall(self, vail, make_series):
        tracker = SnowDepthTracker(InMemoryStore())
        forecasts = [make_series("GFS", [1.0, 2.0, 3.0]), make_series("ECMWF", [3.0, 2.0, 1.0])]
        entries = tracker.update_depth(vail, forecasts)
        assert [e.accumulation for e in entries] == [2.0, 2.0, 2.0]
        assert [e.cumulative for e in entries] == [2.0, 4.0, 6.0]
        assert tracker.season_total(vail) == pytest.approx(6.0)

    def test_seeded_from_stored_history(self, vail, make_series):
        tracker = SnowDepthTracker(InMemoryStore())
        tracker.update_depth(vail, [make_series("GFS", [1.0, 1.0])])
        entries = tracker.update_depth(vail, [make_series("GFS", [0.5])])
        assert entries[0].cumulative == pytest.approx(2.5)
        assert len(tracker.history(vail)) == 3
        assert tracker.season_total(vail) == pytest.approx(2.5)

    def test_shorter_series_divides_by_model_count(self, vail, make_series):
        tracker = SnowDepthTracker(InMemoryStore())
        forecasts = [make_series("GFS", [2.0]), make_series("ECMWF", [2.0, 4.0])]
        entries = tracker.update_depth(vail, forecasts)
        assert len(entries) == 2
        assert entries[1].accumulation == pytest.approx(2.0)
        assert entries[1].date == "2026-02-12T06:00:00+00:00"

    def test_history_capped(self, vail, make_series):
        tracker = SnowDepthTracker(InMemoryStore(), max_history=30)
        for _ in range(5):
            tracker.update_depth(vail, [make_series("GFS", [1.0] * 7)])
        history = tracker.history(vail)
        assert len(history) == 30
        assert history[-1].cumulative == pytest.approx(35.0)

    def test_history_per_location(self, vail, make_series):
        from snowhound.models.location import Location

        store = InMemoryStore()
        tracker = SnowDepthTracker(store)
        tracker.update_depth(vail, [make_series("GFS", [1.0])])
        aspen = Location("aspen", "Aspen", 39.19, -106.82)
        assert tracker.history(aspen) == []
        assert store.get(history_key(vail)) is not None

    def test_corrupt_history_starts_fresh(self, vail, make_series):
        store = InMemoryStore({history_key(vail): "{not json"})
        tracker = SnowDepthTracker(store)
        assert tracker.history(vail) == []
        entries = tracker.update_depth(vail, [make_series("GFS", [1.5])])
        assert entries[0].cumulative == pytest.approx(1.5)

    def test_stored_format(self, vail, make_series):
        store = InMemoryStore()
        SnowDepthTracker(store).update_depth(vail, [make_series("GFS", [1.0])])
        stored = json.loads(store.get("snowhound-snow-depth-vail"))
        assert stored[0]["depth"] == 1.0
        assert stored[0]["accumulation"] == 1.0

    def test_no_forecasts(self, vail):
        store = InMemoryStore()
        assert SnowDepthTracker(store).update_depth(vail, []) == []
        assert store.get(history_key(vail)) is None
