"""Storage contract consumed by the delivery problem registry."""
from __future__ import annotations

from typing import Protocol, Sequence

from bouncewatch.core.problems import DeliveryProblem, ProblemSubtype, ProblemType


class DeliveryProblemStore(Protocol):
    """Anything that can list and append delivery problems for an address.

    Implementations raise ``StoreError`` when the backing store fails.
    """

    def get_bounces(self, address: str) -> Sequence[DeliveryProblem]:
        ...

    def create_bounce(self, address: str, problem_type: ProblemType, problem_subtype: ProblemSubtype) -> None:
        ...
