"""Delivery problem records and their stable integer encodings.

The integer codes below are shared with the existing ``emailBounces`` schema,
so they are spelled out as lookup tables rather than derived from the order
members are declared in.
"""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter, field_serializer, field_validator

from bouncewatch.core.errors import DecodeError
from bouncewatch.utils.logger import logger

# Older auth db rows use 0 when the bounce type was not recognised.
LEGACY_PROBLEM_TYPE_CODE = 0

_email_adapter = TypeAdapter(EmailStr)


def parse_email_address(value: str) -> str:
    """Validate an email address, raising ``pydantic.ValidationError`` if it is invalid."""
    return _email_adapter.validate_python(value)


def _require_code(kind: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(kind, value)
    return value


class ProblemType(Enum):
    """Hard (permanent) bounce, soft (transient) bounce or complaint."""

    HARD_BOUNCE = "HardBounce"
    SOFT_BOUNCE = "SoftBounce"
    COMPLAINT = "Complaint"

    def encode(self) -> int:
        return _PROBLEM_TYPE_CODES[self]

    @classmethod
    def decode(cls, value: int) -> "ProblemType":
        code = _require_code("problem type", value)
        if code == LEGACY_PROBLEM_TYPE_CODE:
            logger.warning("Mapped legacy bounce type %s to %s", code, cls.SOFT_BOUNCE)
            return cls.SOFT_BOUNCE
        try:
            return _PROBLEM_TYPES_BY_CODE[code]
        except KeyError:
            raise DecodeError("problem type", value) from None


class ProblemSubtype(Enum):
    """The underlying cause of a bounce or complaint."""

    # Set by the auth db when the input string was not recognised
    UNMAPPED = "Unmapped"
    # SES bounceSubType values
    UNDETERMINED = "Undetermined"
    GENERAL = "General"
    NO_EMAIL = "NoEmail"
    SUPPRESSED = "Suppressed"
    MAILBOX_FULL = "MailboxFull"
    MESSAGE_TOO_LARGE = "MessageTooLarge"
    CONTENT_REJECTED = "ContentRejected"
    ATTACHMENT_REJECTED = "AttachmentRejected"
    # SES complaintFeedbackType values
    ABUSE = "Abuse"
    AUTH_FAILURE = "AuthFailure"
    FRAUD = "Fraud"
    NOT_SPAM = "NotSpam"
    OTHER = "Other"
    VIRUS = "Virus"

    def encode(self) -> int:
        return _PROBLEM_SUBTYPE_CODES[self]

    @classmethod
    def decode(cls, value: int) -> "ProblemSubtype":
        code = _require_code("problem subtype", value)
        try:
            return _PROBLEM_SUBTYPES_BY_CODE[code]
        except KeyError:
            raise DecodeError("problem subtype", value) from None


_PROBLEM_TYPE_CODES = {
    ProblemType.HARD_BOUNCE: 1,
    ProblemType.SOFT_BOUNCE: 2,
    ProblemType.COMPLAINT: 3,
}

_PROBLEM_SUBTYPE_CODES = {
    ProblemSubtype.UNMAPPED: 0,
    ProblemSubtype.UNDETERMINED: 1,
    ProblemSubtype.GENERAL: 2,
    ProblemSubtype.NO_EMAIL: 3,
    ProblemSubtype.SUPPRESSED: 4,
    ProblemSubtype.MAILBOX_FULL: 5,
    ProblemSubtype.MESSAGE_TOO_LARGE: 6,
    ProblemSubtype.CONTENT_REJECTED: 7,
    ProblemSubtype.ATTACHMENT_REJECTED: 8,
    ProblemSubtype.ABUSE: 9,
    ProblemSubtype.AUTH_FAILURE: 10,
    ProblemSubtype.FRAUD: 11,
    ProblemSubtype.NOT_SPAM: 12,
    ProblemSubtype.OTHER: 13,
    ProblemSubtype.VIRUS: 14,
}

_PROBLEM_TYPES_BY_CODE = {code: member for member, code in _PROBLEM_TYPE_CODES.items()}
_PROBLEM_SUBTYPES_BY_CODE = {code: member for member, code in _PROBLEM_SUBTYPE_CODES.items()}


class DeliveryProblem(BaseModel):
    """A bounced email or a complaint recorded against an address.

    Field aliases are the historical ``emailBounces`` column names so records
    can be exchanged with the auth db unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    address: EmailStr = Field(alias="email")
    problem_type: ProblemType = Field(alias="bounceType")
    problem_subtype: ProblemSubtype = Field(alias="bounceSubType")
    created_at: int = Field(alias="createdAt", ge=0)

    @field_validator("problem_type", mode="before")
    @classmethod
    def decode_problem_type(cls, value: object) -> ProblemType:
        if isinstance(value, ProblemType):
            return value
        return ProblemType.decode(value)

    @field_validator("problem_subtype", mode="before")
    @classmethod
    def decode_problem_subtype(cls, value: object) -> ProblemSubtype:
        if isinstance(value, ProblemSubtype):
            return value
        return ProblemSubtype.decode(value)

    @field_serializer("problem_type")
    def encode_problem_type(self, value: ProblemType) -> int:
        return value.encode()

    @field_serializer("problem_subtype")
    def encode_problem_subtype(self, value: ProblemSubtype) -> int:
        return value.encode()
