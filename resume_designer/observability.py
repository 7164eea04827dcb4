"""Observability for design generation - logging and per-attempt events."""

from __future__ import annotations

import logging
from collections import Counter, deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, Optional

logger = logging.getLogger("resume_designer")

DEFAULT_MAX_EVENTS = 1000


@dataclass
class DesignEvent:
    """A single event in a pipeline run."""

    timestamp: datetime
    event_type: str  # "attempt", "candidate", "batch"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None


def setup_logging(verbose: bool = False) -> None:
    """Configure logging format and handlers for the package logger."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.INFO if verbose else logging.WARNING)


class DesignObserver:
    """
    Collects events for every generation attempt, candidate and batch.

    Events are kept in memory so callers (and tests) can inspect how a run
    went; each one is also logged. Only the most recent ``max_events`` are
    retained, so a long-lived observer stays bounded.
    """

    def __init__(self, max_events: int = DEFAULT_MAX_EVENTS):
        self.events: Deque[DesignEvent] = deque(maxlen=max_events)

    def log_attempt(
        self,
        template_name: str,
        attempt: int,
        state: str,
        reason: Optional[str] = None,
        duration_ms: Optional[float] = None,
    ):
        """
        Log the outcome of one generation attempt.

        Args:
            template_name: Template the candidate was generated for
            attempt: 1-based attempt number
            state: State the attempt ended in (e.g. "PARSE_FAILED")
            reason: Rejection reason, if any
            duration_ms: Time spent in the attempt
        """
        self.events.append(
            DesignEvent(
                timestamp=datetime.now(),
                event_type="attempt",
                data={"template": template_name, "attempt": attempt, "state": state, "reason": reason},
                duration_ms=duration_ms,
            )
        )
        if reason:
            logger.warning(f"[{template_name}] attempt {attempt}: {state} - {reason}")
        else:
            logger.info(f"[{template_name}] attempt {attempt}: {state}")

    def log_candidate(self, template_name: str, state: str, attempts_used: int):
        """Log the terminal state of a candidate."""
        self.events.append(
            DesignEvent(
                timestamp=datetime.now(),
                event_type="candidate",
                data={"template": template_name, "state": state, "attempts": attempts_used},
            )
        )
        logger.info(f"[{template_name}] finished {state} after {attempts_used} attempt(s)")

    def log_batch(self, requested: int, accepted: int, duration_ms: float):
        self.events.append(
            DesignEvent(
                timestamp=datetime.now(),
                event_type="batch",
                data={"requested": requested, "accepted": accepted},
                duration_ms=duration_ms,
            )
        )
        logger.info(f"Design batch: {accepted}/{requested} accepted ({duration_ms:.0f}ms)")

    def get_summary(self) -> Dict[str, Any]:
        """Aggregate counts over the recorded events."""
        attempts = [e for e in self.events if e.event_type == "attempt"]
        candidates = [e for e in self.events if e.event_type == "candidate"]
        rejections = Counter(e.data["state"] for e in attempts if e.data.get("reason"))
        return {
            "total_attempts": len(attempts),
            "accepted": sum(1 for e in candidates if e.data["state"] == "ACCEPTED"),
            "rejected": sum(1 for e in candidates if e.data["state"] == "REJECTED"),
            "rejections_by_state": dict(rejections),
        }

    def clear(self):
        self.events.clear()
