"""Repository layer - data access abstraction."""

from src.pnrelease.repositories.base import BaseRepository
from src.pnrelease.repositories.employee import EmployeeRepository
from src.pnrelease.repositories.release import ReleaseWorkflowRepository
from src.pnrelease.repositories.request import PartNumberRequestRepository

__all__ = [
    "BaseRepository",
    "EmployeeRepository",
    "PartNumberRequestRepository",
    "ReleaseWorkflowRepository",
]
