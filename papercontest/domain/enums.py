"""Closed status vocabularies.

The member values are the exact tokens stored in the database and sent
over the wire. No transition rules are attached here; services decide
which moves are legal.
"""

from enum import StrEnum


class _Vocabulary(StrEnum):
    """StrEnum with a non-raising membership check for raw strings."""

    @classmethod
    def has_value(cls, value: object) -> bool:
        """Return True if ``value`` is one of the literal tokens of this enum."""
        return isinstance(value, str) and value in cls._value2member_map_

    @classmethod
    def values(cls) -> list[str]:
        """Return the tokens in declaration order."""
        return [member.value for member in cls]


class CompetitionStatus(_Vocabulary):
    """Lifecycle of a competition, from drafting to final results."""

    DRAFT = "draft"
    OPEN = "open"  # accepting registrations
    CLOSED = "closed"
    COMPLETED = "completed"


class PaymentStatus(_Vocabulary):
    """Outcome of a registration fee payment."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    REFUNDED = "refunded"


class UserStatus(_Vocabulary):
    """Account state of a platform user."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    DELETED = "deleted"


class RegistrationStatus(_Vocabulary):
    """Progress of one participant's entry in one competition.

    Stored in upper case, unlike the other vocabularies.
    """

    PENDING_PAYMENT = "PENDING_PAYMENT"
    PAID = "PAID"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    REVIEWED = "REVIEWED"
    AWARDED = "AWARDED"
    REJECTED = "REJECTED"


STATUS_VOCABULARIES: dict[str, type[_Vocabulary]] = {
    "competition": CompetitionStatus,
    "payment": PaymentStatus,
    "user": UserStatus,
    "registration": RegistrationStatus,
}
