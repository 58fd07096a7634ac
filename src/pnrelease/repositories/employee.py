"""Repository for Employee entity."""

from sqlmodel import select

from src.pnrelease.models import Employee
from src.pnrelease.repositories.base import BaseRepository


class EmployeeRepository(BaseRepository[Employee]):
    """Repository for the employee directory."""

    model = Employee

    async def get_by_email(self, email: str) -> Employee | None:
        """Get employee by email address."""
        result = await self.session.execute(select(Employee).where(Employee.email == email))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if an employee with the given email exists."""
        employee = await self.get_by_email(email)
        return employee is not None
