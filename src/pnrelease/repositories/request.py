"""Repository for PartNumberRequest entity."""

from uuid import UUID

from sqlalchemy import or_
from sqlmodel import select

from src.pnrelease.models import PartNumberRequest
from src.pnrelease.repositories.base import BaseRepository


class PartNumberRequestRepository(BaseRepository[PartNumberRequest]):
    """Repository for part number requests."""

    model = PartNumberRequest

    async def list_by_employee(self, employee_id: UUID) -> list[PartNumberRequest]:
        """List requests where the employee fills any role slot."""
        result = await self.session.execute(
            select(PartNumberRequest).where(
                or_(
                    PartNumberRequest.created_by_employee_id == employee_id,
                    PartNumberRequest.product_manager_id == employee_id,
                    PartNumberRequest.product_specialist_id == employee_id,
                )
            )
        )
        return list(result.scalars().all())
