"""Tests for settings and bounce limit configuration."""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from bouncewatch.core.config import DAY, HOUR, MINUTE, YEAR, BounceLimit, BounceLimits, Settings, parse_duration


@pytest.mark.parametrize(
    "value, expected",
    [
        ("second", 1000),
        ("5 minutes", 5 * MINUTE),
        ("1 hour", HOUR),
        ("24 hours", DAY),
        ("day", DAY),
        ("2 weeks", 14 * DAY),
        ("month", 30 * DAY),
        ("1 year", YEAR),
        (" 3 Days ", 3 * DAY),
        (86_400_000, DAY),
        (0, 0),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "5", "minutes 5", "5 fortnights", "-1 day", -1, 1.5, True])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_bounce_limit_accepts_duration_strings():
    limit = BounceLimit(period="5 minutes", limit=3)
    assert limit.period == 5 * MINUTE
    assert limit.limit == 3


def test_bounce_limit_rejects_negative_limit():
    with pytest.raises(ValidationError):
        BounceLimit(period="day", limit=-1)


def test_bounce_limit_rejects_bad_period():
    with pytest.raises(ValidationError):
        BounceLimit(period="soon", limit=0)


def test_default_bounce_limits():
    limits = BounceLimits()
    assert limits.enabled is True
    assert limits.hard == (BounceLimit(period=DAY, limit=0), BounceLimit(period=YEAR, limit=1))
    assert limits.soft == (BounceLimit(period=5 * MINUTE, limit=0),)
    assert limits.complaint == (BounceLimit(period=DAY, limit=0), BounceLimit(period=YEAR, limit=1))


def test_bounce_limits_are_immutable():
    limits = BounceLimits()
    with pytest.raises(ValidationError):
        limits.hard = ()  # type: ignore[misc]


def test_bounce_limits_from_environment(monkeypatch):
    monkeypatch.setenv(
        "BOUNCELIMITS",
        json.dumps(
            {
                "enabled": False,
                "hard": [{"period": "24 hours", "limit": 2}],
                "soft": [],
                "complaint": [{"period": 60000, "limit": 0}, {"period": "week", "limit": 3}],
            }
        ),
    )
    limits = Settings().bouncelimits
    assert limits.enabled is False
    assert limits.hard == (BounceLimit(period=DAY, limit=2),)
    assert limits.soft == ()
    assert limits.complaint == (BounceLimit(period=MINUTE, limit=0), BounceLimit(period=7 * DAY, limit=3))


def test_quoted_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", '"sqlite:///:memory:"')
    assert Settings().database_url == "sqlite:///:memory:"
