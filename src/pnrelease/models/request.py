"""Part number request model."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.pnrelease.models.base import utc_now


class PartNumberRequest(SQLModel, table=True):
    """A request for a new part number.

    Holds one employee slot per role taking part in the release flow.
    The release workflow only reads these slots; they are written by the
    service layer (creation, manual reassignment, employee deletion).
    """

    __tablename__ = "part_number_requests"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    pn: str = Field(max_length=10, index=True)
    product_description: str | None = Field(default=None, max_length=255)
    customer_code: str | None = Field(default=None, max_length=20)
    comments: str | None = Field(default=None, max_length=4000)

    # Role slots
    created_by_employee_id: UUID | None = Field(
        default=None, foreign_key="employees.id", index=True
    )
    product_manager_id: UUID | None = Field(default=None, foreign_key="employees.id", index=True)
    product_specialist_id: UUID | None = Field(
        default=None, foreign_key="employees.id", index=True
    )

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
