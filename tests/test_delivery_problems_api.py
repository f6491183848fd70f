"""Tests for the delivery problem routes."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from bouncewatch.api.app import app
from bouncewatch.api.deps import get_delivery_problems
from bouncewatch.core.config import DAY, BounceLimit, BounceLimits
from bouncewatch.core.errors import StoreError
from bouncewatch.core.problems import DeliveryProblem, ProblemSubtype, ProblemType
from bouncewatch.db.store import InMemoryDeliveryProblemStore
from bouncewatch.services.delivery_problems import DeliveryProblems

NOW = 1_700_000_000_000


class FailingStore:
    def get_bounces(self, address):
        raise StoreError(code="store_error", message="Failed to fetch delivery problems")

    def create_bounce(self, address, problem_type, problem_subtype):
        raise StoreError(code="store_error", message="Failed to record delivery problem")


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


def _use_registry(limits: BounceLimits, store) -> None:
    registry = DeliveryProblems(limits, store, clock=lambda: NOW)
    app.dependency_overrides[get_delivery_problems] = lambda: registry


def _hard_bounce() -> DeliveryProblem:
    return DeliveryProblem(
        address="alice@example.com",
        problem_type=ProblemType.HARD_BOUNCE,
        problem_subtype=ProblemSubtype.GENERAL,
        created_at=NOW - 1000,
    )


def test_check_clean_address(client):
    _use_registry(BounceLimits(), InMemoryDeliveryProblemStore())

    response = client.get("/delivery-problems/alice@example.com")

    assert response.status_code == 200
    assert response.json() == {"address": "alice@example.com", "status": "ok"}


def test_check_blocked_address(client):
    limits = BounceLimits(hard=[BounceLimit(period=DAY, limit=0)])
    _use_registry(limits, InMemoryDeliveryProblemStore([_hard_bounce()]))

    response = client.get("/delivery-problems/alice@example.com")

    assert response.status_code == 429
    payload = response.json()
    assert payload["errno"] == 107
    assert payload["code"] == "bounce_hard"
    assert payload["details"]["bouncedAt"] == NOW - 1000
    assert payload["details"]["bounce"]["bounceType"] == 1


def test_check_skipped_when_limits_disabled(client):
    limits = BounceLimits(enabled=False, hard=[BounceLimit(period=DAY, limit=0)])
    _use_registry(limits, InMemoryDeliveryProblemStore([_hard_bounce()]))

    response = client.get("/delivery-problems/alice@example.com")

    assert response.status_code == 200


def test_check_store_outage(client):
    _use_registry(BounceLimits(), FailingStore())

    response = client.get("/delivery-problems/alice@example.com")

    assert response.status_code == 503
    assert response.json()["code"] == "store_error"


def test_check_invalid_address(client):
    _use_registry(BounceLimits(), InMemoryDeliveryProblemStore())

    response = client.get("/delivery-problems/not-an-address")

    assert response.status_code == 400


def test_events_record_through_registry(client):
    store = InMemoryDeliveryProblemStore(clock=lambda: NOW)
    _use_registry(BounceLimits(), store)
    payload = {
        "Type": "Notification",
        "Message": '{"notificationType": "Complaint", "complaint": '
        '{"complaintFeedbackType": "virus", "complainedRecipients": [{"emailAddress": "alice@example.com"}]}}',
    }

    response = client.post("/events/sns", json=payload)

    assert response.status_code == 200
    assert response.json() == {"status": "complaint", "recorded": 1}
    (problem,) = store.get_bounces("alice@example.com")
    assert problem.problem_subtype is ProblemSubtype.VIRUS

    response = client.get("/delivery-problems/alice@example.com")
    assert response.status_code == 429
    assert response.json()["errno"] == 106


def test_health(client):
    response = client.get("/health")
    assert response.json() == {"status": "ok"}
