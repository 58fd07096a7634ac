"""Employee directory service."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pnrelease.core.exceptions import (
    BlankValueNotAllowedError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
)
from src.pnrelease.core.logging import get_logger
from src.pnrelease.models import Employee
from src.pnrelease.repositories import (
    EmployeeRepository,
    PartNumberRequestRepository,
    ReleaseWorkflowRepository,
)
from src.pnrelease.workflow import SLOT_ACCESSORS, ReleaseEngine, assign

logger = get_logger(__name__)


class EmployeeService:
    """Service for employee operations."""

    def __init__(
        self,
        employee_repo: EmployeeRepository,
        request_repo: PartNumberRequestRepository,
        workflow_repo: ReleaseWorkflowRepository,
        session: AsyncSession,
        engine: ReleaseEngine | None = None,
    ):
        self.employee_repo = employee_repo
        self.request_repo = request_repo
        self.workflow_repo = workflow_repo
        self.session = session
        self.engine = engine or ReleaseEngine()

    async def get_employee(self, employee_id: UUID) -> Employee:
        employee = await self.employee_repo.get_by_id(employee_id)
        if employee is None:
            raise EntityNotFoundError(f"Employee {employee_id} not found")
        return employee

    async def create_employee(
        self,
        name: str,
        email: str,
        team: str | None = None,
        location: str | None = None,
    ) -> Employee:
        """Create an employee. Email addresses are unique (case-insensitive)."""
        if not name or not name.strip():
            raise BlankValueNotAllowedError("Given Name is blank.")
        if not email or not email.strip():
            raise BlankValueNotAllowedError("Given Email Address is blank.")
        email = email.strip().lower()

        try:
            if await self.employee_repo.exists_by_email(email):
                raise EntityAlreadyExistsError(
                    "Could not create new Employee. Given email address already exists."
                )
            employee = Employee(name=name.strip(), email=email, team=team, location=location)
            self.employee_repo.add(employee)
            await self.session.commit()
        except IntegrityError as e:
            # Race with a concurrent create of the same email
            await self.session.rollback()
            raise EntityAlreadyExistsError(
                "Could not create new Employee. Given email address already exists."
            ) from e
        except ValueError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create employee", error=str(e))
            raise

        logger.info("Employee created", employee_id=str(employee.id))
        return employee

    async def delete_employee(self, employee_id: UUID) -> None:
        """Delete an employee and remove them from every request.

        All role slots holding the employee are cleared and their current
        responsibilities are dropped. Workflows whose history references one of
        the cleared roles are blocked by the integrity check until someone is
        reassigned. Completed steps keep their role but lose the employee.
        """
        try:
            employee = await self.get_employee(employee_id)

            requests = await self.request_repo.list_by_employee(employee_id)
            for request in requests:
                for role, accessor in SLOT_ACCESSORS.items():
                    if accessor.get(request) == employee_id:
                        assign(role, request, None)
                workflow = await self.workflow_repo.get_by_request_id(request.id)
                if workflow is not None:
                    self.engine.refresh_current_responsible(workflow, request)

            # Detached audit workflows or stale responsibilities not backed by a slot
            for workflow in await self.workflow_repo.list_by_current_responsible(employee_id):
                request = (
                    await self.request_repo.get_by_id(workflow.request_id)
                    if workflow.request_id is not None
                    else None
                )
                self.engine.refresh_current_responsible(workflow, request)

            await self.workflow_repo.clear_step_references(employee_id)
            await self.session.flush()
            await self.employee_repo.delete(employee)
            await self.session.commit()
        except LookupError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to delete employee", error=str(e))
            raise

        logger.info(
            "Employee deleted",
            employee_id=str(employee_id),
            affected_requests=len(requests),
        )
