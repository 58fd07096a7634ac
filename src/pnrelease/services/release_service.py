"""Part number request service - runs the release workflow inside transactions."""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from src.pnrelease.core.config import get_settings
from src.pnrelease.core.exceptions import (
    BlankValueNotAllowedError,
    ConcurrentUpdateError,
    EntityNotFoundError,
)
from src.pnrelease.core.logging import bind_workflow_context, get_logger
from src.pnrelease.models import (
    CustomerNotification,
    PartNumberRequest,
    ReleaseWorkflow,
    Role,
)
from src.pnrelease.models.base import utc_now
from src.pnrelease.repositories import (
    EmployeeRepository,
    PartNumberRequestRepository,
    ReleaseWorkflowRepository,
)
from src.pnrelease.workflow import ReleaseEngine, SubmissionPreview, assign, is_terminal

logger = get_logger(__name__)

# Request fields that can be edited without going through the workflow
EDITABLE_REQUEST_FIELDS = frozenset(
    {
        "pn",
        "product_description",
        "customer_code",
        "comments",
        "product_manager_id",
        "product_specialist_id",
    }
)


class DeletionOutcome(str, Enum):
    """What happened to the workflow when its request was deleted."""

    DETACHED = "detached"
    DELETED = "deleted"


class ReleaseService:
    """Service for part number requests and their release workflow.

    Every public method is one transaction: load request and workflow, run the
    engine, commit. Engine errors roll the transaction back and are re-raised.
    """

    def __init__(
        self,
        request_repo: PartNumberRequestRepository,
        workflow_repo: ReleaseWorkflowRepository,
        employee_repo: EmployeeRepository,
        session: AsyncSession,
        engine: ReleaseEngine | None = None,
    ):
        self.request_repo = request_repo
        self.workflow_repo = workflow_repo
        self.employee_repo = employee_repo
        self.session = session
        self.engine = engine or ReleaseEngine()

    @asynccontextmanager
    async def _transaction(self, action: str) -> AsyncGenerator[None]:
        """Commit on success, roll back on any error.

        A concurrent commit on the same workflow is reported as ConcurrentUpdateError.
        """
        try:
            yield
            await self.session.commit()
        except StaleDataError as e:
            await self.session.rollback()
            logger.warning("Concurrent update detected", action=action)
            raise ConcurrentUpdateError(
                "Request was changed by someone else. Reload and try again."
            ) from e
        except (ValueError, LookupError):
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Failed to {action}", error=str(e))
            raise

    async def _ensure_employees_exist(self, *employee_ids: UUID | None) -> None:
        for employee_id in employee_ids:
            if employee_id is None:
                continue
            if await self.employee_repo.get_by_id(employee_id) is None:
                raise EntityNotFoundError(f"Employee {employee_id} not found")

    async def get_request(self, request_id: UUID) -> PartNumberRequest:
        request = await self.request_repo.get_by_id(request_id)
        if request is None:
            raise EntityNotFoundError(f"Part number request {request_id} not found")
        return request

    async def _load(self, request_id: UUID) -> tuple[PartNumberRequest, ReleaseWorkflow]:
        request = await self.get_request(request_id)
        workflow = await self.workflow_repo.get_by_request_id(request_id)
        if workflow is None:
            raise EntityNotFoundError(f"Release workflow of request {request_id} not found")
        bind_workflow_context(request.id, workflow.id)
        return request, workflow

    async def get_workflow(self, request_id: UUID) -> ReleaseWorkflow:
        _, workflow = await self._load(request_id)
        return workflow

    async def create_request(
        self,
        pn: str,
        created_by_employee_id: UUID,
        *,
        product_manager_id: UUID | None = None,
        product_specialist_id: UUID | None = None,
        product_description: str | None = None,
        customer_code: str | None = None,
        comments: str | None = None,
        release_chain: Sequence[Role] | None = None,
        submit: bool = False,
    ) -> tuple[PartNumberRequest, ReleaseWorkflow]:
        """Create a request together with its release workflow.

        With `submit`, the requester's step is finished right away.
        """
        if not pn or not pn.strip():
            raise BlankValueNotAllowedError("Given Part Number is blank.")

        async with self._transaction("create request"):
            await self._ensure_employees_exist(
                created_by_employee_id, product_manager_id, product_specialist_id
            )
            request = PartNumberRequest(
                pn=pn.strip(),
                product_description=product_description,
                customer_code=customer_code,
                comments=comments,
                created_by_employee_id=created_by_employee_id,
                product_manager_id=product_manager_id,
                product_specialist_id=product_specialist_id,
            )
            chain = (
                release_chain
                if release_chain is not None
                else get_settings().default_release_chain
            )
            workflow = self.engine.start_workflow(request, chain)
            self.engine.advance_step(workflow, request, step_finished=submit)

            self.request_repo.add(request)
            self.workflow_repo.add(workflow)

        logger.info(
            "Part number request created",
            part_number_request_id=str(request.id),
            pn=request.pn,
            submitted=submit,
        )
        return request, workflow

    async def update_request(
        self,
        request_id: UUID,
        changes: dict[str, Any],
        *,
        release_chain: Sequence[Role] | None = None,
        step_finished: bool = False,
    ) -> tuple[PartNumberRequest, ReleaseWorkflow]:
        """Save field edits and optionally finish the current step."""
        unknown = set(changes) - EDITABLE_REQUEST_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")
        if "pn" in changes and (not changes["pn"] or not changes["pn"].strip()):
            raise BlankValueNotAllowedError("Given Part Number is blank.")

        async with self._transaction("update request"):
            request, workflow = await self._load(request_id)
            await self._ensure_employees_exist(
                changes.get("product_manager_id"), changes.get("product_specialist_id")
            )
            for field, value in changes.items():
                setattr(request, field, value)
            request.updated_at = utc_now()

            if release_chain is not None:
                self.engine.reconfigure_chain(workflow, release_chain)
            self.engine.advance_step(workflow, request, step_finished=step_finished)

        logger.info(
            "Part number request updated",
            part_number_request_id=str(request_id),
            step_finished=step_finished,
        )
        return request, workflow

    async def advance(self, request_id: UUID) -> ReleaseWorkflow:
        """Finish the current step and hand the request to the next responsible."""
        async with self._transaction("advance workflow"):
            request, workflow = await self._load(request_id)
            self.engine.advance_step(workflow, request, step_finished=True)
        return workflow

    async def deny(self, request_id: UUID, comment: str | None = None) -> ReleaseWorkflow:
        """Deny the request. A given comment is stored on the request."""
        async with self._transaction("deny request"):
            request, workflow = await self._load(request_id)
            if comment is not None and comment.strip():
                request.comments = comment.strip()
                request.updated_at = utc_now()
            self.engine.deny_request(workflow, request, comment)

        logger.info("Part number request denied", part_number_request_id=str(request_id))
        return workflow

    async def contact_customer(
        self,
        request_id: UUID,
        decision: CustomerNotification | None,
        text: str | None = None,
    ) -> ReleaseWorkflow:
        """Record the customer contact that follows the release decision."""
        async with self._transaction("record customer contact"):
            request, workflow = await self._load(request_id)
            self.engine.apply_customer_contact(workflow, request, decision, text)

        logger.info(
            "Customer contact recorded",
            part_number_request_id=str(request_id),
            customer_notification=workflow.customer_notification,
        )
        return workflow

    async def assign_responsible(
        self, request_id: UUID, role: Role, employee_id: UUID
    ) -> tuple[PartNumberRequest, ReleaseWorkflow]:
        """Put an employee into a role's slot, unblocking the workflow if it waits for that role."""
        role = Role(role)
        async with self._transaction("assign responsible"):
            request, workflow = await self._load(request_id)
            await self._ensure_employees_exist(employee_id)
            assign(role, request, employee_id)
            request.updated_at = utc_now()
            if workflow.current_role_enum is role:
                self.engine.refresh_current_responsible(workflow, request)

        logger.info(
            "Responsible employee assigned",
            part_number_request_id=str(request_id),
            role=role.value,
            employee_id=str(employee_id),
        )
        return request, workflow

    async def preview(self, request_id: UUID) -> SubmissionPreview:
        """Who would be responsible after the next submit."""
        request, workflow = await self._load(request_id)
        return self.engine.preview_next(workflow, request)

    async def delete_request(self, request_id: UUID) -> DeletionOutcome:
        """Delete a request.

        A decided workflow is detached and kept as an audit record, a running
        one is deleted together with the request.
        """
        async with self._transaction("delete request"):
            request, workflow = await self._load(request_id)
            if is_terminal(workflow):
                workflow.request_id = None
                outcome = DeletionOutcome.DETACHED
            else:
                await self.workflow_repo.delete(workflow)
                outcome = DeletionOutcome.DELETED
            # Workflow must let go of the request before the request row goes
            await self.session.flush()
            await self.request_repo.delete(request)

        logger.info(
            "Part number request deleted",
            part_number_request_id=str(request_id),
            workflow=outcome.value,
        )
        return outcome
