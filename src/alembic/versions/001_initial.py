"""Initial migration

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from collections.abc import Sequence

import sqlalchemy as sa
import sqlmodel

from alembic import op

revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    # 1. Employee directory
    op.create_table(
        "employees",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("email", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("team", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("location", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_employees_email", "employees", ["email"], unique=True)

    # 2. Part number requests with their role slots
    op.create_table(
        "part_number_requests",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("pn", sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column(
            "product_description", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True
        ),
        sa.Column("customer_code", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=True),
        sa.Column("comments", sqlmodel.sql.sqltypes.AutoString(length=4000), nullable=True),
        sa.Column("created_by_employee_id", sa.Uuid(), nullable=True),
        sa.Column("product_manager_id", sa.Uuid(), nullable=True),
        sa.Column("product_specialist_id", sa.Uuid(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["created_by_employee_id"], ["employees.id"]),
        sa.ForeignKeyConstraint(["product_manager_id"], ["employees.id"]),
        sa.ForeignKeyConstraint(["product_specialist_id"], ["employees.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_part_number_requests_pn", "part_number_requests", ["pn"])
    for column in ("created_by_employee_id", "product_manager_id", "product_specialist_id"):
        op.create_index(f"ix_part_number_requests_{column}", "part_number_requests", [column])

    # 3. Release workflows (request_id NULL for detached audit records)
    op.create_table(
        "release_workflows",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("request_id", sa.Uuid(), nullable=True),
        sa.Column("status", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False),
        sa.Column(
            "customer_notification", sqlmodel.sql.sqltypes.AutoString(length=20), nullable=False
        ),
        sa.Column("current_role", sqlmodel.sql.sqltypes.AutoString(length=30), nullable=True),
        sa.Column("current_responsible_id", sa.Uuid(), nullable=True),
        sa.Column("remaining_steps", sa.JSON(), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("finished_at", sa.DateTime(), nullable=True),
        sa.Column(
            "rejection_reason_or_follow_up",
            sqlmodel.sql.sqltypes.AutoString(length=255),
            nullable=True,
        ),
        sa.Column("version_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["request_id"], ["part_number_requests.id"]),
        sa.ForeignKeyConstraint(["current_responsible_id"], ["employees.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_release_workflows_request_id", "release_workflows", ["request_id"], unique=True
    )
    op.create_index(
        "ix_release_workflows_current_responsible_id",
        "release_workflows",
        ["current_responsible_id"],
    )

    # 4. Completed steps (audit trail)
    op.create_table(
        "release_completed_steps",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("workflow_id", sa.Uuid(), nullable=True),
        sa.Column("position", sa.Integer(), nullable=True),
        sa.Column("role", sqlmodel.sql.sqltypes.AutoString(length=30), nullable=False),
        sa.Column("employee_id", sa.Uuid(), nullable=True),
        sa.Column("completed_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["workflow_id"], ["release_workflows.id"]),
        sa.ForeignKeyConstraint(["employee_id"], ["employees.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_release_completed_steps_workflow_id", "release_completed_steps", ["workflow_id"]
    )
    op.create_index(
        "ix_release_completed_steps_employee_id", "release_completed_steps", ["employee_id"]
    )


def downgrade() -> None:
    op.drop_table("release_completed_steps")
    op.drop_table("release_workflows")
    op.drop_table("part_number_requests")
    op.drop_table("employees")
