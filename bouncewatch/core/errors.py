"""Exception classes for bounce and complaint tracking.

All exceptions inherit from DeliveryProblemError and carry a code, a message
and optional details so callers can serialize them without extra context.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bouncewatch.core.problems import DeliveryProblem, ProblemType


class DeliveryProblemError(Exception):
    """Base exception for all delivery problem errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class DecodeError(DeliveryProblemError):
    """Raised when a stored integer is not a known problem type or subtype code."""

    def __init__(self, kind: str, value: object) -> None:
        super().__init__(
            code="decode_error",
            message=f"Invalid {kind} code: {value!r}",
            details={"kind": kind, "value": value},
        )
        self.kind = kind
        self.value = value


class StoreError(DeliveryProblemError):
    """Raised when the delivery problem store cannot fetch or insert records."""

    pass


class BounceViolation(DeliveryProblemError):
    """Raised by the registry when an address has exceeded a bounce limit."""

    errno = 0
    code = "bounce_violation"
    description = "Email account has delivery problems"

    def __init__(self, address: str, time: int, problem: "DeliveryProblem") -> None:
        super().__init__(
            code=self.code,
            message=f"{self.description}: {address}",
            details={
                "address": address,
                "bouncedAt": time,
                "bounce": problem.model_dump(mode="json", by_alias=True),
            },
        )
        self.address = address
        self.time = time
        self.problem = problem

    @property
    def problem_type(self) -> "ProblemType":
        return self.problem.problem_type

    def to_dict(self) -> dict:
        payload = super().to_dict()
        payload["errno"] = self.errno
        return payload


class HardBounceViolation(BounceViolation):
    errno = 107
    code = "bounce_hard"
    description = "Email account hard bounced"


class SoftBounceViolation(BounceViolation):
    errno = 108
    code = "bounce_soft"
    description = "Email account soft bounced"


class ComplaintViolation(BounceViolation):
    errno = 106
    code = "complaint"
    description = "Email account sent complaint"
