"""Release workflow models - one workflow per part number request."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlalchemy import JSON, Column, Integer
from sqlalchemy.ext.orderinglist import ordering_list
from sqlmodel import Field, Relationship, SQLModel

from src.pnrelease.models.base import utc_now
from src.pnrelease.models.enums import CustomerNotification, ReleaseStatus, Role

_version_id_column = Column("version_id", Integer, nullable=False)


class ReleaseWorkflow(SQLModel, table=True):
    """State of the release flow of a single part number request.

    `request_id` becomes NULL when a finished workflow is detached from its
    deleted request and kept as an audit record.
    """

    __tablename__ = "release_workflows"
    __mapper_args__ = {"version_id_col": _version_id_column}

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    request_id: UUID | None = Field(
        default=None, foreign_key="part_number_requests.id", unique=True, index=True
    )
    status: str = Field(default=ReleaseStatus.IN_PROGRESS.value, max_length=20)
    customer_notification: str = Field(
        default=CustomerNotification.NOT_NOTIFIED.value, max_length=20
    )
    current_role: str | None = Field(default=None, max_length=30)
    current_responsible_id: UUID | None = Field(
        default=None, foreign_key="employees.id", index=True
    )
    remaining_steps: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    started_at: datetime = Field(default_factory=utc_now)
    finished_at: datetime | None = Field(default=None)
    rejection_reason_or_follow_up: str | None = Field(default=None, max_length=255)
    version_id: int | None = Field(default=None, sa_column=_version_id_column)

    completed_steps: list["CompletedStep"] = Relationship(
        back_populates="workflow",
        sa_relationship_kwargs={
            "order_by": "CompletedStep.position",
            "collection_class": ordering_list("position"),
            "cascade": "all, delete-orphan",
            "lazy": "selectin",
        },
    )

    @property
    def status_enum(self) -> ReleaseStatus:
        return ReleaseStatus(self.status)

    @property
    def customer_notification_enum(self) -> CustomerNotification:
        return CustomerNotification(self.customer_notification)

    @property
    def current_role_enum(self) -> Role | None:
        return Role(self.current_role) if self.current_role is not None else None

    @property
    def remaining_roles(self) -> list[Role]:
        return [Role(step) for step in self.remaining_steps]

    @property
    def is_terminal(self) -> bool:
        """Main decision (release or denial) has been made."""
        return self.finished_at is not None

    @property
    def is_blocked(self) -> bool:
        """Someone has to be reassigned before the flow can go on."""
        return self.current_role is not None and self.current_responsible_id is None


class CompletedStep(SQLModel, table=True):
    """Audit record of one role having finished acting on a workflow."""

    __tablename__ = "release_completed_steps"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    workflow_id: UUID | None = Field(
        default=None, foreign_key="release_workflows.id", index=True
    )
    position: int | None = Field(default=None)
    role: str = Field(max_length=30)
    # NULL once the employee is deleted from the directory
    employee_id: UUID | None = Field(default=None, foreign_key="employees.id", index=True)
    completed_at: datetime = Field(default_factory=utc_now)

    workflow: ReleaseWorkflow | None = Relationship(back_populates="completed_steps")

    @property
    def role_enum(self) -> Role:
        return Role(self.role)
