"""Employee model - the people that can fill a role on a request."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.pnrelease.models.base import utc_now


class Employee(SQLModel, table=True):
    """Employee directory entry."""

    __tablename__ = "employees"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=100, unique=True, index=True)
    team: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=100)
    created_at: datetime = Field(default_factory=utc_now)
