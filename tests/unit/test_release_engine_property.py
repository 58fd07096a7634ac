"""Property-based tests for release engine invariants using hypothesis."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from src.pnrelease.models import CustomerNotification, ReleaseStatus, Role
from src.pnrelease.workflow import ReleaseEngine, ReleaseFlowError, assign, flow_roles
from tests.conftest import FakeClock
from tests.factories import PartNumberRequestFactory, generate_uuid7
from tests.helpers import snapshot

pytestmark = pytest.mark.unit

release_chain = st.lists(st.sampled_from(flow_roles()), min_size=1, max_size=5)

actions = st.lists(
    st.one_of(
        st.just(("advance",)),
        st.tuples(st.just("deny"), st.sampled_from([None, "", "no business case"])),
        st.tuples(st.just("clear"), st.sampled_from(flow_roles())),
        st.tuples(st.just("reassign"), st.sampled_from(flow_roles())),
        st.tuples(
            st.just("contact"),
            st.sampled_from([None, *CustomerNotification]),
            st.sampled_from([None, "", "customer informed"]),
        ),
        st.tuples(st.just("reconfigure"), st.lists(st.sampled_from(list(Role)), max_size=3)),
    ),
    max_size=25,
)


def apply_action(engine: ReleaseEngine, workflow, request, action) -> None:
    match action:
        case ("advance",):
            engine.advance_step(workflow, request, step_finished=True)
        case ("deny", comment):
            engine.deny_request(workflow, request, comment)
        case ("clear", role):
            assign(role, request, None)
            engine.refresh_current_responsible(workflow, request)
        case ("reassign", role):
            assign(role, request, generate_uuid7())
            engine.refresh_current_responsible(workflow, request)
        case ("contact", decision, text):
            engine.apply_customer_contact(workflow, request, decision, text)
        case ("reconfigure", roles):
            engine.reconfigure_chain(workflow, roles)


def is_workflow_action(action) -> bool:
    return action[0] not in ("clear", "reassign")


@given(chain=release_chain, steps=actions)
@settings(max_examples=200, deadline=None)
def test_workflow_invariants_hold_for_any_action_sequence(chain: list[Role], steps: list[tuple]):
    engine = ReleaseEngine(clock=FakeClock())
    request = PartNumberRequestFactory.fully_staffed()
    workflow = engine.start_workflow(request, chain)

    for action in steps:
        before = snapshot(workflow)
        try:
            apply_action(engine, workflow, request, action)
        except ReleaseFlowError:
            # Failed operations leave no trace
            assert snapshot(workflow) == before
            continue
        after = snapshot(workflow)

        # History only grows, and at most one step per successful operation
        assert after["completed_steps"][: len(before["completed_steps"])] == (
            before["completed_steps"]
        )
        if is_workflow_action(action):
            assert len(after["completed_steps"]) - len(before["completed_steps"]) <= 1

        # Decision is taken once and never revised
        if before["finished_at"] is not None:
            assert after["finished_at"] == before["finished_at"]
            assert after["status"] == before["status"]

        # Requester is never queued
        assert Role.REQUESTER.value not in after["remaining_steps"]

        status = ReleaseStatus(after["status"])
        assert (after["finished_at"] is not None) == (status is not ReleaseStatus.IN_PROGRESS)
        if after["customer_notification"] != CustomerNotification.NOT_NOTIFIED.value:
            assert after["finished_at"] is not None


@given(chain=release_chain)
@settings(max_examples=50)
def test_uninterrupted_flow_visits_chain_in_order(chain: list[Role]):
    engine = ReleaseEngine(clock=FakeClock())
    request = PartNumberRequestFactory.fully_staffed()
    workflow = engine.start_workflow(request, chain)

    for _ in range(len(chain) + 1):
        engine.advance_step(workflow, request, step_finished=True)

    assert workflow.status_enum is ReleaseStatus.RELEASED
    assert workflow.current_role_enum is Role.REQUESTER
    assert [step.role_enum for step in workflow.completed_steps] == [Role.REQUESTER, *chain]
