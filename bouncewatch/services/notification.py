"""SES bounce and complaint classifications.

These mirror the strings SES puts in bounce and complaint notifications and
know how to translate themselves into the stored problem type/subtype.
"""
from __future__ import annotations

from enum import Enum
from typing import Optional

from bouncewatch.core.problems import ProblemSubtype, ProblemType
from bouncewatch.utils.logger import logger


class BounceType(Enum):
    UNDETERMINED = "Undetermined"
    PERMANENT = "Permanent"
    TRANSIENT = "Transient"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BounceType":
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unrecognised SES bounceType %r, treating as Undetermined", value)
            return cls.UNDETERMINED

    def problem_type(self) -> ProblemType:
        if self is BounceType.PERMANENT:
            return ProblemType.HARD_BOUNCE
        return ProblemType.SOFT_BOUNCE


class BounceSubtype(Enum):
    UNDETERMINED = "Undetermined"
    GENERAL = "General"
    NO_EMAIL = "NoEmail"
    SUPPRESSED = "Suppressed"
    ON_ACCOUNT_SUPPRESSION_LIST = "OnAccountSuppressionList"
    MAILBOX_FULL = "MailboxFull"
    MESSAGE_TOO_LARGE = "MessageTooLarge"
    CONTENT_REJECTED = "ContentRejected"
    ATTACHMENT_REJECTED = "AttachmentRejected"

    @classmethod
    def parse(cls, value: Optional[str]) -> "BounceSubtype":
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unrecognised SES bounceSubType %r, treating as Undetermined", value)
            return cls.UNDETERMINED

    def problem_subtype(self) -> ProblemSubtype:
        return _BOUNCE_SUBTYPES[self]


class ComplaintFeedbackType(Enum):
    ABUSE = "abuse"
    AUTH_FAILURE = "auth-failure"
    FRAUD = "fraud"
    NOT_SPAM = "not-spam"
    OTHER = "other"
    VIRUS = "virus"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ComplaintFeedbackType"]:
        """Return the feedback type, or ``None`` when SES sent none we know."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            logger.warning("Unrecognised SES complaintFeedbackType %r", value)
            return None

    def problem_subtype(self) -> ProblemSubtype:
        return _COMPLAINT_SUBTYPES[self]


_BOUNCE_SUBTYPES = {
    BounceSubtype.UNDETERMINED: ProblemSubtype.UNDETERMINED,
    BounceSubtype.GENERAL: ProblemSubtype.GENERAL,
    BounceSubtype.NO_EMAIL: ProblemSubtype.NO_EMAIL,
    BounceSubtype.SUPPRESSED: ProblemSubtype.SUPPRESSED,
    BounceSubtype.ON_ACCOUNT_SUPPRESSION_LIST: ProblemSubtype.SUPPRESSED,
    BounceSubtype.MAILBOX_FULL: ProblemSubtype.MAILBOX_FULL,
    BounceSubtype.MESSAGE_TOO_LARGE: ProblemSubtype.MESSAGE_TOO_LARGE,
    BounceSubtype.CONTENT_REJECTED: ProblemSubtype.CONTENT_REJECTED,
    BounceSubtype.ATTACHMENT_REJECTED: ProblemSubtype.ATTACHMENT_REJECTED,
}

_COMPLAINT_SUBTYPES = {
    ComplaintFeedbackType.ABUSE: ProblemSubtype.ABUSE,
    ComplaintFeedbackType.AUTH_FAILURE: ProblemSubtype.AUTH_FAILURE,
    ComplaintFeedbackType.FRAUD: ProblemSubtype.FRAUD,
    ComplaintFeedbackType.NOT_SPAM: ProblemSubtype.NOT_SPAM,
    ComplaintFeedbackType.OTHER: ProblemSubtype.OTHER,
    ComplaintFeedbackType.VIRUS: ProblemSubtype.VIRUS,
}
