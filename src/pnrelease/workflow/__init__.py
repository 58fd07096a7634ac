"""Release workflow: role catalog, resolver, integrity guard and engine."""

from src.pnrelease.workflow.engine import (
    ReleaseEngine,
    SubmissionOutcome,
    SubmissionPreview,
    is_terminal,
    validate_release_chain,
)
from src.pnrelease.workflow.errors import (
    DenialNeedsCommentError,
    EmployeeNotSetError,
    InvalidCustomerContactError,
    InvalidReleaseChainError,
    ReleaseFlowError,
    RoleHasNoSlotError,
    WorkflowAlreadyFinishedError,
)
from src.pnrelease.workflow.guard import IntegrityResult, ensure_integrity, integrity_check
from src.pnrelease.workflow.roles import (
    SLOT_ACCESSORS,
    SlotAccessor,
    assign,
    flow_roles,
    ordered_roles,
    resolve,
)

__all__ = [
    # Engine
    "ReleaseEngine",
    "SubmissionOutcome",
    "SubmissionPreview",
    "is_terminal",
    "validate_release_chain",
    # Guard
    "IntegrityResult",
    "ensure_integrity",
    "integrity_check",
    # Roles
    "SLOT_ACCESSORS",
    "SlotAccessor",
    "assign",
    "flow_roles",
    "ordered_roles",
    "resolve",
    # Errors
    "DenialNeedsCommentError",
    "EmployeeNotSetError",
    "InvalidCustomerContactError",
    "InvalidReleaseChainError",
    "ReleaseFlowError",
    "RoleHasNoSlotError",
    "WorkflowAlreadyFinishedError",
]
