"""Integrity check of the completed history of a release workflow."""

from dataclasses import dataclass

from src.pnrelease.models.enums import Role
from src.pnrelease.models.release import ReleaseWorkflow
from src.pnrelease.models.request import PartNumberRequest
from src.pnrelease.workflow.errors import EmployeeNotSetError
from src.pnrelease.workflow.roles import resolve


@dataclass(frozen=True)
class IntegrityResult:
    ok: bool
    failing_role: Role | None = None


def integrity_check(workflow: ReleaseWorkflow, request: PartNumberRequest) -> IntegrityResult:
    """Check that every role in the completed history still resolves on the request.

    A historical role stops resolving when its employee was removed from the
    request after the step was recorded, typically because the employee was
    deleted. The requester is skipped.
    """
    for step in workflow.completed_steps:
        role = step.role_enum
        if role is Role.REQUESTER:
            continue
        if resolve(role, request) is None:
            return IntegrityResult(ok=False, failing_role=role)
    return IntegrityResult(ok=True)


def ensure_integrity(workflow: ReleaseWorkflow, request: PartNumberRequest) -> None:
    """Raise EmployeeNotSetError naming the first historical role that no longer resolves."""
    result = integrity_check(workflow, request)
    if not result.ok:
        raise EmployeeNotSetError(result.failing_role)
