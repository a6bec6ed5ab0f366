"""
Publish module for resumeup.

Handles the bump decision and the per-run orchestration:
- Eligibility rules for a single resume
- One run: list, refresh-retry, evaluate, publish, notify
"""

from .eligibility import Decision, decide, parse_next_publish_at, PUBLISH_NOW, WAIT_UNTIL, SKIP_NOT_VISIBLE
from .run import RunCoordinator, RunReport, RunResult

__all__ = [
    "Decision",
    "decide",
    "parse_next_publish_at",
    "PUBLISH_NOW",
    "WAIT_UNTIL",
    "SKIP_NOT_VISIBLE",
    "RunCoordinator",
    "RunReport",
    "RunResult",
]
