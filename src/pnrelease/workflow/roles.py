"""Role catalog and responsible-party resolution.

Every role that has a slot on a request is mapped to an explicit getter/setter
pair, so resolving who fills a role never depends on attribute names.
"""

from collections.abc import Callable
from dataclasses import dataclass
from uuid import UUID

from src.pnrelease.models.enums import SLOTTED_ROLES, Role
from src.pnrelease.models.request import PartNumberRequest
from src.pnrelease.workflow.errors import RoleHasNoSlotError


@dataclass(frozen=True)
class SlotAccessor:
    """Typed access to the employee slot of one role on a request."""

    get: Callable[[PartNumberRequest], UUID | None]
    set: Callable[[PartNumberRequest, UUID | None], None]


def _set_creator(request: PartNumberRequest, employee_id: UUID | None) -> None:
    request.created_by_employee_id = employee_id


def _set_product_manager(request: PartNumberRequest, employee_id: UUID | None) -> None:
    request.product_manager_id = employee_id


def _set_product_specialist(request: PartNumberRequest, employee_id: UUID | None) -> None:
    request.product_specialist_id = employee_id


SLOT_ACCESSORS: dict[Role, SlotAccessor] = {
    Role.REQUESTER: SlotAccessor(
        get=lambda request: request.created_by_employee_id,
        set=_set_creator,
    ),
    Role.PRODUCT_MANAGER: SlotAccessor(
        get=lambda request: request.product_manager_id,
        set=_set_product_manager,
    ),
    Role.PRODUCT_SPECIALIST: SlotAccessor(
        get=lambda request: request.product_specialist_id,
        set=_set_product_specialist,
    ),
}

if set(SLOT_ACCESSORS) != SLOTTED_ROLES:
    raise RuntimeError("Every slotted role needs exactly one slot accessor")


def ordered_roles() -> list[Role]:
    """All roles in catalog order."""
    return sorted(Role, key=lambda role: role.sort_order)


def flow_roles() -> list[Role]:
    """Roles that may be queued as remaining steps, in catalog order."""
    return [role for role in ordered_roles() if role.is_flow_role]


def resolve(role: Role, request: PartNumberRequest) -> UUID | None:
    """Return the employee currently filling `role` on `request`.

    None means nobody is assigned, which is an expected result.
    """
    accessor = SLOT_ACCESSORS.get(role)
    if accessor is None:
        return None
    return accessor.get(request)


def assign(role: Role, request: PartNumberRequest, employee_id: UUID | None) -> None:
    """Put `employee_id` into the slot of `role` on `request`."""
    accessor = SLOT_ACCESSORS.get(role)
    if accessor is None:
        raise RoleHasNoSlotError(role)
    accessor.set(request, employee_id)
