"""Part number request schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.pnrelease.models.enums import Role


class PartNumberRequestCreate(BaseModel):
    """Schema for creating a part number request (its workflow is started with it)."""

    pn: str = Field(min_length=1, max_length=10)
    created_by_employee_id: UUID
    product_manager_id: UUID | None = None
    product_specialist_id: UUID | None = None
    product_description: str | None = Field(default=None, max_length=255)
    customer_code: str | None = Field(default=None, max_length=20)
    comments: str | None = Field(default=None, max_length=4000)
    release_chain: list[Role] | None = Field(
        default=None,
        json_schema_extra={
            "examples": [["product_specialist", "product_manager", "product_specialist"]],
            "description": "Roles visited after the requester. Defaults to the configured chain.",
        },
    )
    submit: bool = False

    @field_validator("pn")
    @classmethod
    def validate_pn(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Part number cannot be empty or whitespace only")
        return v


class PartNumberRequestUpdate(BaseModel):
    """Schema for editing a request. `step_finished` also hands the workflow on."""

    pn: str | None = Field(default=None, min_length=1, max_length=10)
    product_manager_id: UUID | None = None
    product_specialist_id: UUID | None = None
    product_description: str | None = Field(default=None, max_length=255)
    customer_code: str | None = Field(default=None, max_length=20)
    comments: str | None = Field(default=None, max_length=4000)
    release_chain: list[Role] | None = None
    step_finished: bool = False

    def changes(self) -> dict:
        """Explicitly set request fields (workflow controls excluded)."""
        return self.model_dump(exclude_unset=True, exclude={"release_chain", "step_finished"})


class PartNumberRequestRead(BaseModel):
    id: UUID
    pn: str
    product_description: str | None = None
    customer_code: str | None = None
    comments: str | None = None
    created_by_employee_id: UUID | None = None
    product_manager_id: UUID | None = None
    product_specialist_id: UUID | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
