"""Integration tests for the employee service."""

import pytest

from src.pnrelease.core.exceptions import (
    BlankValueNotAllowedError,
    EntityAlreadyExistsError,
    EntityNotFoundError,
)
from src.pnrelease.models import Role
from src.pnrelease.workflow import EmployeeNotSetError
from tests.factories import generate_uuid7
from tests.integration.conftest import employee_service_for, release_service_for

pytestmark = pytest.mark.integration

PS = Role.PRODUCT_SPECIALIST
PM = Role.PRODUCT_MANAGER


async def start_request(release_service, staff, submit: bool = True):
    request, _ = await release_service.create_request(
        "PN-2000",
        staff["creator"].id,
        product_manager_id=staff["manager"].id,
        product_specialist_id=staff["specialist"].id,
        release_chain=[PS, PM],
        submit=submit,
    )
    return request


class TestCreateEmployee:
    async def test_create(self, employee_service):
        employee = await employee_service.create_employee(
            "Erika Example", " Erika.Example@Example.com ", team="PM", location="Graz"
        )

        assert employee.email == "erika.example@example.com"
        assert (await employee_service.get_employee(employee.id)).name == "Erika Example"

    async def test_duplicate_email_is_case_insensitive(self, employee_service):
        await employee_service.create_employee("First", "same@example.com")
        with pytest.raises(EntityAlreadyExistsError):
            await employee_service.create_employee("Second", "SAME@example.com")

    @pytest.mark.parametrize(("name", "email"), [(" ", "a@example.com"), ("Name", "")])
    async def test_blank_values_rejected(self, employee_service, name, email):
        with pytest.raises(BlankValueNotAllowedError):
            await employee_service.create_employee(name, email)

    async def test_get_unknown(self, employee_service):
        with pytest.raises(EntityNotFoundError):
            await employee_service.get_employee(generate_uuid7())


class TestDeleteEmployee:
    async def test_current_responsible_removed_blocks_workflow(
        self, employee_service, release_service, staff, new_session
    ):
        request = await start_request(release_service, staff)

        await employee_service.delete_employee(staff["specialist"].id)

        async with new_session() as session:
            service = release_service_for(session)
            stored = await service.get_request(request.id)
            workflow = await service.get_workflow(request.id)
            assert stored.product_specialist_id is None
            assert workflow.current_role_enum is PS
            assert workflow.is_blocked

            with pytest.raises(EmployeeNotSetError) as exc_info:
                await service.advance(request.id)
            assert exc_info.value.role is PS

        async with new_session() as session:
            service = release_service_for(session)
            await service.assign_responsible(request.id, PS, staff["spare"].id)
            workflow = await service.advance(request.id)
        assert workflow.current_role_enum is PM

    async def test_history_reference_blocks_until_reassigned(
        self, employee_service, release_service, staff, new_session
    ):
        request = await start_request(release_service, staff)
        await release_service.advance(request.id)  # specialist done, manager responsible

        await employee_service.delete_employee(staff["specialist"].id)

        async with new_session() as session:
            service = release_service_for(session)
            workflow = await service.get_workflow(request.id)
            specialist_step = workflow.completed_steps[1]
            assert specialist_step.role_enum is PS
            assert specialist_step.employee_id is None
            assert workflow.current_responsible_id == staff["manager"].id

            with pytest.raises(EmployeeNotSetError) as exc_info:
                await service.advance(request.id)
            assert exc_info.value.role is PS

    async def test_delete_unknown(self, employee_service):
        with pytest.raises(EntityNotFoundError):
            await employee_service.delete_employee(generate_uuid7())

    async def test_employee_is_gone(self, employee_service, staff, new_session):
        await employee_service.delete_employee(staff["spare"].id)

        async with new_session() as session:
            with pytest.raises(EntityNotFoundError):
                await employee_service_for(session).get_employee(staff["spare"].id)
