"""
Publish eligibility rules for resumeup.

Decides, for a single resume, whether to bump it now, wait for the
cooldown to expire, or leave it alone because employers cannot see it.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..errors import SchemaError
from ..hh.models import ResumeSummary


PUBLISH_NOW = "publish_now"
WAIT_UNTIL = "wait_until"
SKIP_NOT_VISIBLE = "skip_not_visible"

# hh.ru offset date-time, e.g. 2024-05-01T12:30:00+0300
NEXT_PUBLISH_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


@dataclass(frozen=True)
class Decision:
    """Outcome of evaluating one resume."""
    action: str
    wait_until: Optional[datetime] = None


def parse_next_publish_at(value: Optional[str]) -> datetime:
    """
    Parse hh.ru's next_publish_at timestamp.

    Raises:
        SchemaError: If the value is missing or not in the expected format
    """
    if not isinstance(value, str):
        raise SchemaError("Resume has no 'next_publish_at' timestamp")

    try:
        return datetime.strptime(value, NEXT_PUBLISH_FORMAT)
    except ValueError as e:
        raise SchemaError(f"Error parsing update time {value!r}: {e}") from e


def decide(summary: ResumeSummary) -> Decision:
    """
    Decide what to do with a resume.

    Rules, in order:
    1. Not visible to clients (employers) -> skip
    2. Platform says it can be published -> publish now
    3. Otherwise -> wait until next_publish_at

    A malformed next_publish_at raises SchemaError instead of skipping,
    so an unknown upstream format never hides a resume that needs action.
    """
    if not summary.visible_to_clients:
        return Decision(action=SKIP_NOT_VISIBLE)

    if summary.can_publish_now:
        return Decision(action=PUBLISH_NOW)

    return Decision(
        action=WAIT_UNTIL,
        wait_until=parse_next_publish_at(summary.next_publish_at),
    )
