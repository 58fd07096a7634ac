from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class EmployeeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr = Field(max_length=100)
    team: str | None = Field(default=None, max_length=100)
    location: str | None = Field(default=None, max_length=100)


class EmployeeRead(BaseModel):
    id: UUID
    name: str
    email: str
    team: str | None = None
    location: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
