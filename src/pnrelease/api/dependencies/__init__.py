"""FastAPI dependency injection definitions."""

from src.pnrelease.api.dependencies.db import DBSession, get_db_session
from src.pnrelease.api.dependencies.repositories import (
    EmployeeRepo,
    RequestRepo,
    WorkflowRepo,
    get_employee_repository,
    get_request_repository,
    get_workflow_repository,
)
from src.pnrelease.api.dependencies.services import (
    EmployeeServiceDep,
    ReleaseServiceDep,
    get_employee_service,
    get_release_service,
)

__all__ = [
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "EmployeeRepo",
    "RequestRepo",
    "WorkflowRepo",
    "get_employee_repository",
    "get_request_repository",
    "get_workflow_repository",
    # Services
    "EmployeeServiceDep",
    "ReleaseServiceDep",
    "get_employee_service",
    "get_release_service",
]
