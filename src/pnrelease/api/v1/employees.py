"""Employee directory endpoints."""

from uuid import UUID

from fastapi import APIRouter, status

from src.pnrelease.api.dependencies import EmployeeServiceDep
from src.pnrelease.schemas.employee import EmployeeCreate, EmployeeRead

router = APIRouter(prefix="/employees", tags=["employees"])


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create employee",
    responses={
        201: {"description": "Employee created"},
        409: {"description": "Employee with this email already exists"},
    },
)
async def create_employee(
    request: EmployeeCreate,
    service: EmployeeServiceDep,
) -> EmployeeRead:
    employee = await service.create_employee(
        name=request.name,
        email=request.email,
        team=request.team,
        location=request.location,
    )
    return EmployeeRead.model_validate(employee)


@router.get(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Get employee",
    responses={
        200: {"description": "Employee details"},
        404: {"description": "Employee not found"},
    },
)
async def get_employee(employee_id: UUID, service: EmployeeServiceDep) -> EmployeeRead:
    employee = await service.get_employee(employee_id)
    return EmployeeRead.model_validate(employee)


@router.delete(
    "/{employee_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete employee",
    description=(
        "Delete an employee. Every role slot the employee fills is cleared; "
        "workflows waiting for one of those roles are blocked until someone is assigned."
    ),
    responses={
        204: {"description": "Employee deleted"},
        404: {"description": "Employee not found"},
    },
)
async def delete_employee(employee_id: UUID, service: EmployeeServiceDep) -> None:
    await service.delete_employee(employee_id)
