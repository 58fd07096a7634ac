"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.pnrelease.api.dependencies.db import DBSession
from src.pnrelease.api.dependencies.repositories import EmployeeRepo, RequestRepo, WorkflowRepo
from src.pnrelease.services import EmployeeService, ReleaseService


def get_release_service(
    request_repo: RequestRepo,
    workflow_repo: WorkflowRepo,
    employee_repo: EmployeeRepo,
    session: DBSession,
) -> ReleaseService:
    """Get release service with repositories sharing one session."""
    return ReleaseService(request_repo, workflow_repo, employee_repo, session)


def get_employee_service(
    employee_repo: EmployeeRepo,
    request_repo: RequestRepo,
    workflow_repo: WorkflowRepo,
    session: DBSession,
) -> EmployeeService:
    """Get employee service with repositories sharing one session."""
    return EmployeeService(employee_repo, request_repo, workflow_repo, session)


ReleaseServiceDep = Annotated[ReleaseService, Depends(get_release_service)]
EmployeeServiceDep = Annotated[EmployeeService, Depends(get_employee_service)]
