"""Model exports.

Import from here: `from src.pnrelease.models import PartNumberRequest, ReleaseWorkflow`
"""

from src.pnrelease.models.employee import Employee
from src.pnrelease.models.enums import CustomerNotification, ReleaseStatus, Role
from src.pnrelease.models.release import CompletedStep, ReleaseWorkflow
from src.pnrelease.models.request import PartNumberRequest

__all__ = [
    # Enums
    "CustomerNotification",
    "ReleaseStatus",
    "Role",
    # Models
    "CompletedStep",
    "Employee",
    "PartNumberRequest",
    "ReleaseWorkflow",
]
