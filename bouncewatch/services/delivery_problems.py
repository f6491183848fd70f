"""Bounce/complaint registry.

Decides whether an address has collected enough bounces or complaints,
recently enough, that we should stop sending to it.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable, Optional, Sequence

from bouncewatch.core.config import BounceLimit, BounceLimits, Settings
from bouncewatch.core.errors import (
    BounceViolation,
    ComplaintViolation,
    HardBounceViolation,
    SoftBounceViolation,
)
from bouncewatch.core.ports import DeliveryProblemStore
from bouncewatch.core.problems import ProblemSubtype, ProblemType
from bouncewatch.services.notification import BounceSubtype, BounceType, ComplaintFeedbackType
from bouncewatch.utils.datetime import from_ms, utcnow_ms
from bouncewatch.utils.logger import logger

_VIOLATIONS: dict[ProblemType, type[BounceViolation]] = {
    ProblemType.HARD_BOUNCE: HardBounceViolation,
    ProblemType.SOFT_BOUNCE: SoftBounceViolation,
    ProblemType.COMPLAINT: ComplaintViolation,
}


def is_limit_violation(count: int, created_at: int, now: int, limits: Sequence[BounceLimit]) -> bool:
    """Return True as soon as one limit has ``count`` over it within its period."""
    for limit in limits:
        if count > limit.limit and created_at >= now - limit.period:
            return True
    return False


class DeliveryProblems:
    """Registry of bounces and complaints backed by a ``DeliveryProblemStore``.

    The registry keeps no state of its own beyond the limits it was built
    with, so a single instance can be shared as long as the store can.
    """

    def __init__(
        self,
        limits: BounceLimits,
        store: DeliveryProblemStore,
        clock: Callable[[], int] = utcnow_ms,
    ) -> None:
        self.limits = limits
        self.store = store
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings, store: DeliveryProblemStore) -> "DeliveryProblems":
        return cls(settings.bouncelimits, store)

    def _limits_for(self, problem_type: ProblemType) -> Sequence[BounceLimit]:
        if problem_type is ProblemType.HARD_BOUNCE:
            return self.limits.hard
        if problem_type is ProblemType.SOFT_BOUNCE:
            return self.limits.soft
        return self.limits.complaint

    def check(self, address: str) -> None:
        """Raise a ``BounceViolation`` if ``address`` has exceeded any limit.

        Records are counted in the order the store returns them and the first
        record that pushes its category over a limit is reported.
        """
        problems = self.store.get_bounces(address)
        now = self._clock()
        counts: Counter[ProblemType] = Counter()
        for problem in problems:
            counts[problem.problem_type] += 1
            limits = self._limits_for(problem.problem_type)
            if is_limit_violation(counts[problem.problem_type], problem.created_at, now, limits):
                logger.info(
                    "Blocking %s: %s limit exceeded by problem at %s",
                    address,
                    problem.problem_type.value,
                    from_ms(problem.created_at).isoformat(),
                )
                raise _VIOLATIONS[problem.problem_type](
                    address=address,
                    time=problem.created_at,
                    problem=problem,
                )

    def record_bounce(self, address: str, bounce_type: BounceType, bounce_subtype: BounceSubtype) -> None:
        """Record a hard or soft bounce against an address."""
        problem_type = bounce_type.problem_type()
        self.store.create_bounce(address, problem_type, bounce_subtype.problem_subtype())
        logger.info("Recorded %s for %s", problem_type.value, address)

    def record_complaint(self, address: str, complaint_type: Optional[ComplaintFeedbackType] = None) -> None:
        """Record a complaint against an address."""
        problem_subtype = ProblemSubtype.UNMAPPED
        if complaint_type is not None:
            problem_subtype = complaint_type.problem_subtype()
        self.store.create_bounce(address, ProblemType.COMPLAINT, problem_subtype)
        logger.info("Recorded complaint (%s) for %s", problem_subtype.value, address)
