"""Tests for structured logging context."""

import logging
from uuid import uuid7

import pytest
import structlog
from structlog.testing import CapturingLogger, capture_logs

from src.pnrelease.core.logging import (
    bind_request_context,
    bind_workflow_context,
    clear_request_context,
    setup_logging,
)
from src.pnrelease.models import Role
from src.pnrelease.workflow import EmployeeNotSetError, ReleaseEngine
from tests.factories import PartNumberRequestFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def capturing_logger():
    """Route structlog output into a CapturingLogger."""
    cap_logger = CapturingLogger()
    old_config = structlog.get_config()

    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=lambda *args, **kwargs: cap_logger,
        cache_logger_on_first_use=False,
    )

    clear_request_context()
    yield cap_logger
    clear_request_context()
    structlog.configure(**old_config)


def test_bind_request_context(capturing_logger):
    bind_request_context("test-request-123")
    structlog.get_logger().info("test message")

    entries = capturing_logger.calls
    assert len(entries) == 1
    assert entries[0].kwargs["request_id"] == "test-request-123"


def test_bind_request_context_with_none(capturing_logger):
    """None request_id is not bound."""
    bind_request_context(None)
    structlog.get_logger().info("test message")

    assert "request_id" not in capturing_logger.calls[0].kwargs


def test_bind_workflow_context(capturing_logger):
    request_id = uuid7()
    workflow_id = uuid7()

    bind_workflow_context(request_id, workflow_id)
    structlog.get_logger().info("test message")

    kwargs = capturing_logger.calls[0].kwargs
    assert kwargs["part_number_request_id"] == str(request_id)
    assert kwargs["workflow_id"] == str(workflow_id)


def test_bind_workflow_context_without_workflow(capturing_logger):
    bind_workflow_context(uuid7())
    structlog.get_logger().info("test message")

    assert "workflow_id" not in capturing_logger.calls[0].kwargs


def test_context_accumulates_and_clears(capturing_logger):
    bind_request_context("test-request-123")
    bind_workflow_context(uuid7())
    structlog.get_logger().info("with context")

    clear_request_context()
    structlog.get_logger().info("without context")

    first, second = capturing_logger.calls
    assert first.kwargs["request_id"] == "test-request-123"
    assert "part_number_request_id" in first.kwargs
    assert "request_id" not in second.kwargs
    assert "part_number_request_id" not in second.kwargs


def test_engine_logs_release_decision():
    engine = ReleaseEngine()
    request = PartNumberRequestFactory.fully_staffed()
    workflow = engine.start_workflow(request, [Role.PRODUCT_MANAGER])

    with capture_logs() as logs:
        engine.advance_step(workflow, request, step_finished=True)
        engine.advance_step(workflow, request, step_finished=True)

    events = [entry["event"] for entry in logs]
    assert events.count("Workflow step completed") == 2
    assert "Workflow released" in events


def test_engine_warns_about_missing_responsible():
    engine = ReleaseEngine()
    request = PartNumberRequestFactory.fully_staffed()
    workflow = engine.start_workflow(request, [Role.PRODUCT_MANAGER])
    request.product_manager_id = None

    with capture_logs() as logs, pytest.raises(EmployeeNotSetError):
        engine.advance_step(workflow, request, step_finished=True)

    warning = next(entry for entry in logs if entry["log_level"] == "warning")
    assert warning["role"] == Role.PRODUCT_MANAGER.value


@pytest.mark.parametrize(
    ("json_logs", "renderer"),
    [(True, structlog.processors.JSONRenderer), (False, structlog.dev.ConsoleRenderer)],
)
def test_setup_logging_level_and_renderer(json_logs: bool, renderer: type):
    root = logging.getLogger()
    old_level = root.level
    old_config = structlog.get_config()
    try:
        setup_logging("warning", json_logs=json_logs)

        assert root.level == logging.WARNING
        assert isinstance(structlog.get_config()["processors"][-1], renderer)
    finally:
        root.setLevel(old_level)
        structlog.configure(**old_config)
