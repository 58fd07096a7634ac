"""Shared enums for models."""

from enum import Enum


class Role(str, Enum):
    """Participant role in the release flow of a part number request."""

    SLC = "slc"
    SJP = "sjp"
    PRODUCT_MANAGER = "product_manager"
    PRODUCT_SPECIALIST = "product_specialist"
    REQUESTER = "requester"

    @property
    def display_name(self) -> str:
        return _ROLE_DISPLAY_NAMES[self]

    @property
    def sort_order(self) -> int:
        return _ROLE_SORT_ORDER[self]

    @property
    def has_slot(self) -> bool:
        """Whether a request holds an employee for this role."""
        return self in SLOTTED_ROLES

    @property
    def is_flow_role(self) -> bool:
        """Whether this role may be queued as a remaining step.

        The requester is the implicit start and end of every flow and is never queued.
        """
        return self.has_slot and self is not Role.REQUESTER


_ROLE_DISPLAY_NAMES = {
    Role.SLC: "SLC Employee",
    Role.SJP: "SJP Employee",
    Role.PRODUCT_MANAGER: "Product Manager",
    Role.PRODUCT_SPECIALIST: "Product Specialist",
    Role.REQUESTER: "Request Creator",
}

_ROLE_SORT_ORDER = {
    Role.SLC: 1,
    Role.SJP: 2,
    Role.PRODUCT_MANAGER: 10,
    Role.PRODUCT_SPECIALIST: 20,
    Role.REQUESTER: 80,
}

SLOTTED_ROLES = frozenset({Role.REQUESTER, Role.PRODUCT_MANAGER, Role.PRODUCT_SPECIALIST})


class ReleaseStatus(str, Enum):
    """Main decision state of a release workflow."""

    IN_PROGRESS = "in_progress"
    RELEASED = "released"
    DENIED = "denied"


class CustomerNotification(str, Enum):
    """Outcome of contacting the customer after the main decision."""

    NOT_NOTIFIED = "not_notified"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NOTIFIED = "notified"
