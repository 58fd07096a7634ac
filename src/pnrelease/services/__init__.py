from src.pnrelease.services.employee_service import EmployeeService
from src.pnrelease.services.release_service import DeletionOutcome, ReleaseService

__all__ = ["DeletionOutcome", "EmployeeService", "ReleaseService"]
