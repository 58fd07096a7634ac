"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.pnrelease.api.dependencies.db import DBSession
from src.pnrelease.repositories import (
    EmployeeRepository,
    PartNumberRequestRepository,
    ReleaseWorkflowRepository,
)


def get_employee_repository(session: DBSession) -> EmployeeRepository:
    return EmployeeRepository(session)


def get_request_repository(session: DBSession) -> PartNumberRequestRepository:
    return PartNumberRequestRepository(session)


def get_workflow_repository(session: DBSession) -> ReleaseWorkflowRepository:
    return ReleaseWorkflowRepository(session)


EmployeeRepo = Annotated[EmployeeRepository, Depends(get_employee_repository)]
RequestRepo = Annotated[PartNumberRequestRepository, Depends(get_request_repository)]
WorkflowRepo = Annotated[ReleaseWorkflowRepository, Depends(get_workflow_repository)]
