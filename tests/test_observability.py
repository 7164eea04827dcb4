"""Tests for the in-memory design event log."""

from resume_designer.observability import DEFAULT_MAX_EVENTS, DesignObserver


class TestDesignObserver:
    def test_events_are_bounded(self):
        observer = DesignObserver(max_events=5)
        for attempt in range(1, 13):
            observer.log_attempt("Ocean Breeze", attempt, "PARSE_FAILED", reason="not json")

        assert len(observer.events) == 5
        assert [e.data["attempt"] for e in observer.events] == [8, 9, 10, 11, 12]

    def test_default_bound(self):
        observer = DesignObserver()
        for n in range(DEFAULT_MAX_EVENTS + 50):
            observer.log_candidate(f"Template {n}", "ACCEPTED", 1)
        assert len(observer.events) == DEFAULT_MAX_EVENTS

    def test_summary(self):
        observer = DesignObserver()
        observer.log_attempt("A", 1, "COLOR_REJECTED", reason="Unauthorized colors: #ff00aa")
        observer.log_attempt("A", 2, "ACCEPTED")
        observer.log_candidate("A", "ACCEPTED", 2)
        observer.log_candidate("B", "REJECTED", 3)

        assert observer.get_summary() == {
            "total_attempts": 2,
            "accepted": 1,
            "rejected": 1,
            "rejections_by_state": {"COLOR_REJECTED": 1},
        }

    def test_clear(self):
        observer = DesignObserver()
        observer.log_batch(3, 2, 120.0)
        observer.clear()
        assert len(observer.events) == 0
