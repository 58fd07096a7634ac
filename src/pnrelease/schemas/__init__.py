from src.pnrelease.schemas.employee import EmployeeCreate, EmployeeRead
from src.pnrelease.schemas.release import (
    AssignResponsibleRequest,
    CompletedStepRead,
    CustomerContactRequest,
    DenyRequest,
    PartNumberRequestDetail,
    ReleaseWorkflowRead,
    RequestDeletionResponse,
    SubmissionPreviewRead,
)
from src.pnrelease.schemas.request import (
    PartNumberRequestCreate,
    PartNumberRequestRead,
    PartNumberRequestUpdate,
)

__all__ = [
    "AssignResponsibleRequest",
    "CompletedStepRead",
    "CustomerContactRequest",
    "DenyRequest",
    "EmployeeCreate",
    "EmployeeRead",
    "PartNumberRequestCreate",
    "PartNumberRequestDetail",
    "PartNumberRequestRead",
    "PartNumberRequestUpdate",
    "ReleaseWorkflowRead",
    "RequestDeletionResponse",
    "SubmissionPreviewRead",
]
