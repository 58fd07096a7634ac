"""Part number request endpoints - request CRUD and the release workflow."""

from uuid import UUID

from fastapi import APIRouter, status

from src.pnrelease.api.dependencies import ReleaseServiceDep
from src.pnrelease.models import PartNumberRequest, ReleaseWorkflow, Role
from src.pnrelease.schemas.release import (
    AssignResponsibleRequest,
    CustomerContactRequest,
    DenyRequest,
    PartNumberRequestDetail,
    ReleaseWorkflowRead,
    RequestDeletionResponse,
    SubmissionPreviewRead,
)
from src.pnrelease.schemas.request import PartNumberRequestCreate, PartNumberRequestUpdate

router = APIRouter(prefix="/requests", tags=["requests"])

_FLOW_RESPONSES: dict[int | str, dict] = {
    404: {"description": "Request not found"},
    409: {"description": "Responsible employee missing or concurrent update"},
    422: {"description": "Action not allowed in the current workflow state"},
}


def _detail(
    request: PartNumberRequest, workflow: ReleaseWorkflow | None
) -> PartNumberRequestDetail:
    detail = PartNumberRequestDetail.model_validate(request)
    if workflow is not None:
        detail.workflow = ReleaseWorkflowRead.model_validate(workflow)
    return detail


@router.post(
    "",
    response_model=PartNumberRequestDetail,
    status_code=status.HTTP_201_CREATED,
    summary="Create part number request",
    description=(
        "Create a request and start its release workflow with the requester responsible. "
        "With `submit` the requester's step is finished right away."
    ),
    responses={
        201: {"description": "Request created"},
        404: {"description": "Referenced employee not found"},
        409: {"description": "Next responsible employee missing"},
        422: {"description": "Invalid release chain"},
    },
)
async def create_request(
    request: PartNumberRequestCreate,
    service: ReleaseServiceDep,
) -> PartNumberRequestDetail:
    pn_request, workflow = await service.create_request(
        request.pn,
        request.created_by_employee_id,
        product_manager_id=request.product_manager_id,
        product_specialist_id=request.product_specialist_id,
        product_description=request.product_description,
        customer_code=request.customer_code,
        comments=request.comments,
        release_chain=request.release_chain,
        submit=request.submit,
    )
    return _detail(pn_request, workflow)


@router.get(
    "/{request_id}",
    response_model=PartNumberRequestDetail,
    summary="Get part number request",
    responses={
        200: {"description": "Request with workflow state"},
        404: {"description": "Request not found"},
    },
)
async def get_request(request_id: UUID, service: ReleaseServiceDep) -> PartNumberRequestDetail:
    pn_request = await service.get_request(request_id)
    workflow = await service.get_workflow(request_id)
    return _detail(pn_request, workflow)


@router.patch(
    "/{request_id}",
    response_model=PartNumberRequestDetail,
    summary="Update part number request",
    description=(
        "Save field edits. With `step_finished` the current responsible also "
        "finishes their step; nothing is saved if the hand-over fails."
    ),
    responses={200: {"description": "Request updated"}, **_FLOW_RESPONSES},
)
async def update_request(
    request_id: UUID,
    request: PartNumberRequestUpdate,
    service: ReleaseServiceDep,
) -> PartNumberRequestDetail:
    pn_request, workflow = await service.update_request(
        request_id,
        request.changes(),
        release_chain=request.release_chain,
        step_finished=request.step_finished,
    )
    return _detail(pn_request, workflow)


@router.delete(
    "/{request_id}",
    response_model=RequestDeletionResponse,
    summary="Delete part number request",
    description="A decided workflow is kept as an audit record, a running one is deleted.",
    responses={
        200: {"description": "Request deleted"},
        404: {"description": "Request not found"},
    },
)
async def delete_request(request_id: UUID, service: ReleaseServiceDep) -> RequestDeletionResponse:
    outcome = await service.delete_request(request_id)
    return RequestDeletionResponse(workflow=outcome.value)


@router.get(
    "/{request_id}/workflow",
    response_model=ReleaseWorkflowRead,
    summary="Get release workflow",
    responses={
        200: {"description": "Workflow state and completed steps"},
        404: {"description": "Request not found"},
    },
)
async def get_workflow(request_id: UUID, service: ReleaseServiceDep) -> ReleaseWorkflowRead:
    workflow = await service.get_workflow(request_id)
    return ReleaseWorkflowRead.model_validate(workflow)


@router.get(
    "/{request_id}/workflow/preview",
    response_model=SubmissionPreviewRead,
    summary="Preview next responsible",
    description="Who would become responsible if the current step were finished now.",
    responses={
        200: {"description": "Submission preview"},
        404: {"description": "Request not found"},
    },
)
async def preview_workflow(
    request_id: UUID, service: ReleaseServiceDep
) -> SubmissionPreviewRead:
    preview = await service.preview(request_id)
    return SubmissionPreviewRead.model_validate(preview)


@router.post(
    "/{request_id}/workflow/advance",
    response_model=ReleaseWorkflowRead,
    summary="Finish current step",
    responses={200: {"description": "Workflow advanced"}, **_FLOW_RESPONSES},
)
async def advance_workflow(request_id: UUID, service: ReleaseServiceDep) -> ReleaseWorkflowRead:
    workflow = await service.advance(request_id)
    return ReleaseWorkflowRead.model_validate(workflow)


@router.post(
    "/{request_id}/workflow/deny",
    response_model=ReleaseWorkflowRead,
    summary="Deny request",
    description="Deny the request. A comment is required unless the request already has one.",
    responses={200: {"description": "Request denied"}, **_FLOW_RESPONSES},
)
async def deny_request(
    request_id: UUID,
    request: DenyRequest,
    service: ReleaseServiceDep,
) -> ReleaseWorkflowRead:
    workflow = await service.deny(request_id, request.comment)
    return ReleaseWorkflowRead.model_validate(workflow)


@router.post(
    "/{request_id}/workflow/customer-contact",
    response_model=ReleaseWorkflowRead,
    summary="Record customer contact",
    responses={200: {"description": "Customer contact recorded"}, **_FLOW_RESPONSES},
)
async def contact_customer(
    request_id: UUID,
    request: CustomerContactRequest,
    service: ReleaseServiceDep,
) -> ReleaseWorkflowRead:
    workflow = await service.contact_customer(request_id, request.decision, request.text)
    return ReleaseWorkflowRead.model_validate(workflow)


@router.put(
    "/{request_id}/responsibles/{role}",
    response_model=PartNumberRequestDetail,
    summary="Assign responsible employee",
    description="Fill a role's slot. A workflow waiting for that role is unblocked.",
    responses={200: {"description": "Responsible assigned"}, **_FLOW_RESPONSES},
)
async def assign_responsible(
    request_id: UUID,
    role: Role,
    request: AssignResponsibleRequest,
    service: ReleaseServiceDep,
) -> PartNumberRequestDetail:
    pn_request, workflow = await service.assign_responsible(request_id, role, request.employee_id)
    return _detail(pn_request, workflow)
