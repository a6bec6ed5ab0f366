"""Tests for the per-resume publish decision."""

from datetime import datetime, timedelta, timezone

import pytest

from resumeup.errors import SchemaError
from resumeup.hh.models import ResumeSummary
from resumeup.publish.eligibility import (
    PUBLISH_NOW,
    SKIP_NOT_VISIBLE,
    WAIT_UNTIL,
    decide,
    parse_next_publish_at,
)


def summary(visible=True, can_publish=False, next_publish_at=None):
    return ResumeSummary(
        id="r1",
        title="Dev",
        visible_to_clients=visible,
        can_publish_now=can_publish,
        next_publish_at=next_publish_at,
    )


@pytest.mark.parametrize("can_publish", [True, False])
@pytest.mark.parametrize("next_publish_at", [None, "garbage", "2024-05-01T12:30:00+0300"])
def test_not_visible_is_always_skipped(can_publish, next_publish_at):
    decision = decide(summary(visible=False, can_publish=can_publish, next_publish_at=next_publish_at))
    assert decision.action == SKIP_NOT_VISIBLE
    assert decision.wait_until is None


def test_visible_and_publishable_is_published_now():
    decision = decide(summary(can_publish=True, next_publish_at="not even a date"))
    assert decision.action == PUBLISH_NOW


def test_cooldown_waits_until_parsed_time():
    decision = decide(summary(next_publish_at="2024-05-01T12:30:00+0300"))

    assert decision.action == WAIT_UNTIL
    assert decision.wait_until == datetime(
        2024, 5, 1, 12, 30, tzinfo=timezone(timedelta(hours=3))
    )
    assert decision.wait_until.utcoffset() == timedelta(hours=3)


@pytest.mark.parametrize("value", [None, "", "01.05.2024 12:30", "2024-05-01 12:30:00", "2024-05-01T12:30:00"])
def test_malformed_next_publish_at_is_a_schema_error(value):
    with pytest.raises(SchemaError):
        decide(summary(next_publish_at=value))


def test_parse_next_publish_at_negative_offset():
    parsed = parse_next_publish_at("2023-12-31T23:59:59-0500")
    assert parsed.utcoffset() == timedelta(hours=-5)
    assert parsed.astimezone(timezone.utc) == datetime(2024, 1, 1, 4, 59, 59, tzinfo=timezone.utc)
