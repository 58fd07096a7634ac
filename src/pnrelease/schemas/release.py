"""Release workflow schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.pnrelease.models.enums import CustomerNotification, ReleaseStatus, Role
from src.pnrelease.schemas.request import PartNumberRequestRead
from src.pnrelease.workflow import SubmissionOutcome


class CompletedStepRead(BaseModel):
    position: int | None = None
    role: Role
    employee_id: UUID | None = None
    completed_at: datetime

    model_config = {"from_attributes": True}


class ReleaseWorkflowRead(BaseModel):
    id: UUID
    request_id: UUID | None = None
    status: ReleaseStatus
    customer_notification: CustomerNotification
    current_role: Role | None = None
    current_responsible_id: UUID | None = None
    remaining_steps: list[Role]
    completed_steps: list[CompletedStepRead]
    started_at: datetime
    finished_at: datetime | None = None
    rejection_reason_or_follow_up: str | None = None
    is_terminal: bool
    is_blocked: bool

    model_config = {"from_attributes": True}


class DenyRequest(BaseModel):
    comment: str | None = Field(default=None, max_length=4000)


class CustomerContactRequest(BaseModel):
    """Customer reaction. Leave `decision` empty for denied requests."""

    decision: CustomerNotification | None = None
    text: str | None = Field(default=None, max_length=255)


class AssignResponsibleRequest(BaseModel):
    employee_id: UUID


class SubmissionPreviewRead(BaseModel):
    outcome: SubmissionOutcome
    role: Role | None = None
    employee_id: UUID | None = None

    model_config = {"from_attributes": True}


class RequestDeletionResponse(BaseModel):
    workflow: str  # "detached" or "deleted"


class PartNumberRequestDetail(PartNumberRequestRead):
    """A request together with the state of its release workflow."""

    workflow: ReleaseWorkflowRead | None = None
