"""Delivery problem stores.

``SqlDeliveryProblemStore`` is the production store over the ``email_bounces``
table. ``InMemoryDeliveryProblemStore`` keeps records in a list and is used by
tests and local tooling.
"""
from __future__ import annotations

import threading
from typing import Callable, Iterable, List, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bouncewatch.core.errors import StoreError
from bouncewatch.core.problems import DeliveryProblem, ProblemSubtype, ProblemType, parse_email_address
from bouncewatch.db import models
from bouncewatch.utils.datetime import utcnow_ms
from bouncewatch.utils.logger import logger


def _validated_address(address: str) -> str:
    try:
        return parse_email_address(address)
    except ValidationError as exc:
        raise StoreError(
            code="invalid_address",
            message=f"Invalid email address: {address!r}",
            details={"address": address},
        ) from exc


def _to_problem(row: models.EmailBounce) -> DeliveryProblem:
    return DeliveryProblem(
        address=row.email,
        problem_type=ProblemType.decode(row.bounce_type),
        problem_subtype=ProblemSubtype.decode(row.bounce_sub_type),
        created_at=row.created_at,
    )


class SqlDeliveryProblemStore:
    """Stores delivery problems in the ``email_bounces`` table."""

    def __init__(self, db: Session, clock: Callable[[], int] = utcnow_ms) -> None:
        self._db = db
        self._clock = clock

    def get_bounces(self, address: str) -> List[DeliveryProblem]:
        """Return every problem for ``address``, newest first."""
        email = _validated_address(address)
        try:
            rows = (
                self._db.query(models.EmailBounce)
                .filter(models.EmailBounce.email == email)
                .order_by(models.EmailBounce.created_at.desc(), models.EmailBounce.id.desc())
                .all()
            )
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Failed to fetch bounces for %s", address)
            raise StoreError(
                code="store_error",
                message="Failed to fetch delivery problems",
                details={"address": address},
            ) from exc
        return [_to_problem(row) for row in rows]

    def create_bounce(self, address: str, problem_type: ProblemType, problem_subtype: ProblemSubtype) -> None:
        email = _validated_address(address)
        row = models.EmailBounce(
            email=email,
            bounce_type=problem_type.encode(),
            bounce_sub_type=problem_subtype.encode(),
            created_at=self._clock(),
        )
        try:
            self._db.add(row)
            self._db.commit()
        except SQLAlchemyError as exc:
            self._db.rollback()
            logger.exception("Failed to record %s for %s", problem_type.value, address)
            raise StoreError(
                code="store_error",
                message="Failed to record delivery problem",
                details={"address": address},
            ) from exc


class InMemoryDeliveryProblemStore:
    """List-backed store that returns problems in the order they were added."""

    def __init__(
        self,
        problems: Iterable[DeliveryProblem] = (),
        clock: Callable[[], int] = utcnow_ms,
    ) -> None:
        self._problems: List[DeliveryProblem] = list(problems)
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def problems(self) -> List[DeliveryProblem]:
        with self._lock:
            return list(self._problems)

    def get_bounces(self, address: str) -> Sequence[DeliveryProblem]:
        email = _validated_address(address)
        with self._lock:
            return [problem for problem in self._problems if problem.address == email]

    def create_bounce(self, address: str, problem_type: ProblemType, problem_subtype: ProblemSubtype) -> None:
        problem = DeliveryProblem(
            address=_validated_address(address),
            problem_type=problem_type,
            problem_subtype=problem_subtype,
            created_at=self._clock(),
        )
        with self._lock:
            self._problems.append(problem)
