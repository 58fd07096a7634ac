"""Repository for ReleaseWorkflow entity."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.pnrelease.models import CompletedStep, ReleaseWorkflow
from src.pnrelease.repositories.base import BaseRepository


class ReleaseWorkflowRepository(BaseRepository[ReleaseWorkflow]):
    """Repository for release workflows and their completed steps."""

    model = ReleaseWorkflow

    async def get_by_request_id(self, request_id: UUID) -> ReleaseWorkflow | None:
        """Get the workflow attached to a request (completed steps are eager loaded)."""
        result = await self.session.execute(
            select(ReleaseWorkflow).where(ReleaseWorkflow.request_id == request_id)
        )
        return result.scalar_one_or_none()

    async def list_by_current_responsible(self, employee_id: UUID) -> list[ReleaseWorkflow]:
        """List workflows waiting for the given employee."""
        result = await self.session.execute(
            select(ReleaseWorkflow).where(ReleaseWorkflow.current_responsible_id == employee_id)
        )
        return list(result.scalars().all())

    async def clear_step_references(self, employee_id: UUID) -> None:
        """Remove the employee from all completed steps (history keeps the role)."""
        await self.session.execute(
            update(CompletedStep)
            .where(CompletedStep.employee_id == employee_id)
            .values(employee_id=None)
        )
