"""Business rule violations raised by the release workflow.

All of them are recoverable by a corrective user action; none is a system failure.
"""

from src.pnrelease.models.enums import Role


class ReleaseFlowError(ValueError):
    """Base class for release workflow errors."""


class EmployeeNotSetError(ReleaseFlowError):
    """A role that must be filled cannot be resolved to an employee.

    The caller has to reassign the role's slot on the request and retry.
    """

    def __init__(self, role: Role | None):
        self.role = role
        role_name = role.display_name if role is not None else "unknown role"
        super().__init__(f"Next step of task cannot be assigned to any Employee ({role_name}).")


class DenialNeedsCommentError(ReleaseFlowError):
    def __init__(self) -> None:
        super().__init__("Request is denied but no comments specified.")


class InvalidCustomerContactError(ReleaseFlowError):
    """Customer contact recorded too early, twice, or with a decision not allowed."""


class InvalidReleaseChainError(ReleaseFlowError):
    """Release chain cannot be used as remaining steps of a workflow."""


class WorkflowAlreadyFinishedError(ReleaseFlowError):
    def __init__(self) -> None:
        super().__init__("Release decision has already been made for this request.")


class RoleHasNoSlotError(ReleaseFlowError):
    def __init__(self, role: Role):
        self.role = role
        super().__init__(f"Role '{role.display_name}' has no responsible employee on a request.")
