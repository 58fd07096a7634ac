"""Test helper functions for common workflow setups."""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from src.pnrelease.models import (
    CompletedStep,
    CustomerNotification,
    Employee,
    PartNumberRequest,
    ReleaseStatus,
    ReleaseWorkflow,
    Role,
)
from src.pnrelease.workflow import ReleaseEngine, resolve
from tests.factories import EmployeeFactory

PS = Role.PRODUCT_SPECIALIST
PM = Role.PRODUCT_MANAGER


def workflow_at(
    request: PartNumberRequest,
    current_role: Role | None,
    remaining: Sequence[Role] = (),
    *,
    status: ReleaseStatus = ReleaseStatus.IN_PROGRESS,
    notification: CustomerNotification = CustomerNotification.NOT_NOTIFIED,
    history: Sequence[Role] = (),
    finished_at: datetime | None = None,
) -> ReleaseWorkflow:
    """Build a workflow in an arbitrary state.

    The current responsible is resolved from the request; history steps record
    whoever fills the role right now.
    """
    workflow = ReleaseWorkflow(
        request_id=request.id,
        status=status.value,
        customer_notification=notification.value,
        current_role=current_role.value if current_role is not None else None,
        current_responsible_id=resolve(current_role, request) if current_role else None,
        remaining_steps=[role.value for role in remaining],
        started_at=datetime(2026, 1, 1, 8, 0),
        finished_at=finished_at,
    )
    for role in history:
        workflow.completed_steps.append(
            CompletedStep(
                role=role.value,
                employee_id=resolve(role, request),
                completed_at=datetime(2026, 1, 1, 8, 30),
            )
        )
    return workflow


def snapshot(workflow: ReleaseWorkflow) -> dict:
    """Comparable copy of every field the engine may change."""
    return {
        "status": workflow.status,
        "customer_notification": workflow.customer_notification,
        "current_role": workflow.current_role,
        "current_responsible_id": workflow.current_responsible_id,
        "remaining_steps": list(workflow.remaining_steps),
        "finished_at": workflow.finished_at,
        "rejection_reason_or_follow_up": workflow.rejection_reason_or_follow_up,
        "completed_steps": [(s.role, s.employee_id) for s in workflow.completed_steps],
    }


def run_to_release(engine: ReleaseEngine, workflow: ReleaseWorkflow, request: PartNumberRequest):
    """Finish steps until the release decision is made."""
    while workflow.finished_at is None:
        engine.advance_step(workflow, request, step_finished=True)
    return workflow


async def create_employees(session: AsyncSession, count: int) -> list[Employee]:
    employees = [EmployeeFactory.build() for _ in range(count)]
    session.add_all(employees)
    await session.commit()
    return employees
