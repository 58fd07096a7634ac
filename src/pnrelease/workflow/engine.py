"""Release workflow engine.

Drives a part number request through its chain of responsible roles:

    requester -> remaining steps (front to back) -> requester (decision made)
              -> customer contact -> fully finished

The engine is a pure in-memory state transition over one workflow and one
request. It reads the request's role slots but never writes them. Every
operation either applies all of its changes or raises before touching the
workflow.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID

from src.pnrelease.core.logging import get_logger
from src.pnrelease.models.base import utc_now
from src.pnrelease.models.enums import CustomerNotification, ReleaseStatus, Role
from src.pnrelease.models.release import CompletedStep, ReleaseWorkflow
from src.pnrelease.models.request import PartNumberRequest
from src.pnrelease.workflow.errors import (
    DenialNeedsCommentError,
    EmployeeNotSetError,
    InvalidCustomerContactError,
    InvalidReleaseChainError,
    WorkflowAlreadyFinishedError,
)
from src.pnrelease.workflow.guard import ensure_integrity
from src.pnrelease.workflow.roles import resolve

logger = get_logger(__name__)


class SubmissionOutcome(str, Enum):
    """What the next submit of the current responsible would lead to."""

    FIRST_STEP_EMPTY = "first_step_empty"
    FINISHED = "finished"
    RESPONSIBLE = "responsible"
    RESPONSIBILITY_MISSING = "responsibility_missing"


@dataclass(frozen=True)
class SubmissionPreview:
    outcome: SubmissionOutcome
    role: Role | None = None
    employee_id: UUID | None = None


@dataclass(frozen=True)
class _Transition:
    """Field values of a workflow after a finished step."""

    current_role: Role | None
    current_responsible_id: UUID | None
    remaining_steps: list[str]
    status: ReleaseStatus
    decided: bool


def _is_blank(text: str | None) -> bool:
    return text is None or not text.strip()


def validate_release_chain(roles: Sequence[Role], allow_empty: bool = False) -> list[Role]:
    """Validate a chain of roles for use as remaining steps.

    Raises:
        InvalidReleaseChainError: If the chain is empty (unless allowed), or holds
            the requester or a role without a slot on the request.
    """
    chain = [Role(role) for role in roles]
    if not chain and not allow_empty:
        raise InvalidReleaseChainError("Release chain needs at least one role")
    for role in chain:
        if not role.is_flow_role:
            raise InvalidReleaseChainError(
                f"Role '{role.display_name}' cannot be a step of the release chain"
            )
    return chain


def is_terminal(workflow: ReleaseWorkflow) -> bool:
    """Whether release or denial has been decided.

    A terminal workflow is detached and kept when its request is deleted,
    a running one is deleted together with its request.
    """
    return workflow.finished_at is not None


class ReleaseEngine:
    """State machine of the release flow."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self._clock = clock

    def start_workflow(
        self, request: PartNumberRequest, remaining_steps: Sequence[Role]
    ) -> ReleaseWorkflow:
        """Create the workflow of a newly created request.

        The requester is responsible first; `remaining_steps` is the chain of
        roles visited after the requester submits.
        """
        chain = validate_release_chain(remaining_steps)
        creator_id = resolve(Role.REQUESTER, request)
        if creator_id is None:
            raise EmployeeNotSetError(Role.REQUESTER)

        workflow = ReleaseWorkflow(
            request_id=request.id,
            status=ReleaseStatus.IN_PROGRESS.value,
            customer_notification=CustomerNotification.NOT_NOTIFIED.value,
            current_role=Role.REQUESTER.value,
            current_responsible_id=creator_id,
            remaining_steps=[role.value for role in chain],
            started_at=self._clock(),
        )
        logger.info(
            "Workflow started",
            workflow_id=str(workflow.id),
            release_chain=workflow.remaining_steps,
        )
        return workflow

    def reconfigure_chain(
        self, workflow: ReleaseWorkflow, remaining_steps: Sequence[Role]
    ) -> ReleaseWorkflow:
        """Replace the roles still to visit of a running workflow."""
        if is_terminal(workflow):
            raise WorkflowAlreadyFinishedError()
        chain = validate_release_chain(remaining_steps, allow_empty=True)
        workflow.remaining_steps = [role.value for role in chain]
        return workflow

    def refresh_current_responsible(
        self, workflow: ReleaseWorkflow, request: PartNumberRequest | None
    ) -> ReleaseWorkflow:
        """Re-read who fills the current role after the request's slots changed.

        Used after a manual reassignment and after an employee was removed. A
        detached workflow has no request to read from and loses its responsible.
        """
        role = workflow.current_role_enum
        if role is None:
            return workflow
        workflow.current_responsible_id = resolve(role, request) if request is not None else None
        if workflow.current_responsible_id is None:
            logger.warning(
                "Workflow blocked until a responsible employee is assigned",
                workflow_id=str(workflow.id),
                role=role.value,
            )
        return workflow

    def advance_step(
        self,
        workflow: ReleaseWorkflow,
        request: PartNumberRequest,
        *,
        step_finished: bool,
    ) -> ReleaseWorkflow:
        """Hand the workflow on after the current responsible finished acting.

        The completed history is checked on every save. Without `step_finished`
        nothing else happens: the caller only saved field edits.

        Raises:
            EmployeeNotSetError: A historical role, the acting role or the next
                role cannot be resolved. The workflow is left unchanged.
            WorkflowAlreadyFinishedError: Nobody is responsible any more.
        """
        ensure_integrity(workflow, request)
        if not step_finished:
            return workflow

        acting_role = workflow.current_role_enum
        if acting_role is None:
            raise WorkflowAlreadyFinishedError()
        acting_employee_id = workflow.current_responsible_id or resolve(acting_role, request)
        if acting_employee_id is None:
            logger.warning(
                "Responsible employee missing",
                workflow_id=str(workflow.id),
                role=acting_role.value,
            )
            raise EmployeeNotSetError(acting_role)

        transition = self._next_transition(workflow, request)

        now = self._clock()
        workflow.completed_steps.append(
            CompletedStep(role=acting_role.value, employee_id=acting_employee_id, completed_at=now)
        )
        workflow.status = transition.status.value
        workflow.current_role = (
            transition.current_role.value if transition.current_role is not None else None
        )
        workflow.current_responsible_id = transition.current_responsible_id
        workflow.remaining_steps = transition.remaining_steps
        if transition.decided and workflow.finished_at is None:
            workflow.finished_at = now
            logger.info(
                "Workflow released"
                if transition.status is ReleaseStatus.RELEASED
                else "Workflow denied",
                workflow_id=str(workflow.id),
            )

        logger.info(
            "Workflow step completed",
            workflow_id=str(workflow.id),
            completed_role=acting_role.value,
            next_role=workflow.current_role,
        )
        return workflow

    def _next_transition(
        self, workflow: ReleaseWorkflow, request: PartNumberRequest
    ) -> _Transition:
        status = workflow.status_enum
        not_notified = workflow.customer_notification_enum is CustomerNotification.NOT_NOTIFIED
        remaining = list(workflow.remaining_steps)
        creator_id = resolve(Role.REQUESTER, request)

        if status is ReleaseStatus.DENIED:
            if not_notified:
                # Denial decided, the requester has to inform the customer
                return _Transition(Role.REQUESTER, creator_id, remaining, status, decided=True)
            return _Transition(None, None, remaining, status, decided=False)

        if not remaining:
            if not_notified:
                return _Transition(
                    Role.REQUESTER, creator_id, remaining, ReleaseStatus.RELEASED, decided=True
                )
            return _Transition(None, None, remaining, status, decided=False)

        next_role = Role(remaining[0])
        next_employee_id = resolve(next_role, request)
        if next_employee_id is None:
            logger.warning(
                "Next responsible employee missing",
                workflow_id=str(workflow.id),
                role=next_role.value,
            )
            raise EmployeeNotSetError(next_role)
        return _Transition(next_role, next_employee_id, remaining[1:], status, decided=False)

    def deny_request(
        self,
        workflow: ReleaseWorkflow,
        request: PartNumberRequest,
        comment: str | None = None,
    ) -> ReleaseWorkflow:
        """Deny the request immediately, whatever is left in the chain.

        A comment is required, either given here or already stored on the request.
        Remaining steps are kept as they were.
        """
        if is_terminal(workflow):
            raise WorkflowAlreadyFinishedError()
        if _is_blank(comment) and _is_blank(request.comments):
            raise DenialNeedsCommentError()

        previous_status = workflow.status
        workflow.status = ReleaseStatus.DENIED.value
        try:
            return self.advance_step(workflow, request, step_finished=True)
        except Exception:
            workflow.status = previous_status
            raise

    def apply_customer_contact(
        self,
        workflow: ReleaseWorkflow,
        request: PartNumberRequest,
        decision: CustomerNotification | None,
        text: str | None = None,
    ) -> ReleaseWorkflow:
        """Record how the customer was informed about the decision.

        Released requests take the customer's reaction (accepted or rejected,
        the latter with a reason). Denied requests only take a follow-up note
        and are marked notified.
        """
        if not is_terminal(workflow):
            raise InvalidCustomerContactError(
                "Customer can only be contacted after the release decision."
            )
        if workflow.customer_notification_enum is not CustomerNotification.NOT_NOTIFIED:
            raise InvalidCustomerContactError("Customer contact has already been recorded.")

        if workflow.status_enum is ReleaseStatus.RELEASED:
            if decision not in (CustomerNotification.ACCEPTED, CustomerNotification.REJECTED):
                raise InvalidCustomerContactError(
                    "Customer reaction to a released request must be accepted or rejected."
                )
            if decision is CustomerNotification.REJECTED and _is_blank(text):
                raise InvalidCustomerContactError("Customer rejection needs a reason.")
            notification = decision
            note = text.strip() if decision is CustomerNotification.REJECTED else None
        else:
            if decision not in (None, CustomerNotification.NOTIFIED):
                raise InvalidCustomerContactError(
                    "Customer of a denied request can only be marked as notified."
                )
            notification = CustomerNotification.NOTIFIED
            note = None if _is_blank(text) else text.strip()

        previous = (workflow.customer_notification, workflow.rejection_reason_or_follow_up)
        workflow.customer_notification = notification.value
        workflow.rejection_reason_or_follow_up = note
        try:
            return self.advance_step(workflow, request, step_finished=True)
        except Exception:
            workflow.customer_notification, workflow.rejection_reason_or_follow_up = previous
            raise

    def preview_next(
        self, workflow: ReleaseWorkflow, request: PartNumberRequest
    ) -> SubmissionPreview:
        """Tell who would become responsible if the current step were finished now."""
        remaining = workflow.remaining_roles
        if not remaining and not workflow.completed_steps:
            return SubmissionPreview(SubmissionOutcome.FIRST_STEP_EMPTY)
        if not remaining:
            return SubmissionPreview(SubmissionOutcome.FINISHED)

        next_role = remaining[0]
        employee_id = resolve(next_role, request)
        if employee_id is None:
            return SubmissionPreview(SubmissionOutcome.RESPONSIBILITY_MISSING, role=next_role)
        return SubmissionPreview(
            SubmissionOutcome.RESPONSIBLE, role=next_role, employee_id=employee_id
        )
