"""initial planner schema

Revision ID: 20261019_01_initial
Revises:
Create Date: 2026-10-19

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20261019_01_initial"
down_revision = None
branch_labels = None
depends_on = None


def _uuid() -> sa.Uuid:
    return sa.Uuid(as_uuid=False)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # equipment
    op.create_table(
        "equipment_folders",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "parent_id",
            _uuid(),
            sa.ForeignKey("equipment_folders.id"),
            nullable=True,
        ),
        *_timestamps(),
    )
    op.create_index(
        "ix_equipment_folders_parent_id", "equipment_folders", ["parent_id"]
    )

    op.create_table(
        "equipment",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("stock", sa.Integer(), nullable=True),
        sa.Column(
            "folder_id", _uuid(), sa.ForeignKey("equipment_folders.id"), nullable=True
        ),
        *_timestamps(),
    )
    op.create_index("ix_equipment_folder_id", "equipment", ["folder_id"])

    # crew
    op.create_table(
        "crew_folders",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "crew_roles",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        *_timestamps(),
    )
    op.create_table(
        "crew_members",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=True),
        sa.Column("phone", sa.String(length=64), nullable=True),
        sa.Column(
            "folder_id", _uuid(), sa.ForeignKey("crew_folders.id"), nullable=True
        ),
        *_timestamps(),
    )
    op.create_index("ix_crew_members_folder_id", "crew_members", ["folder_id"])
    op.create_table(
        "crew_member_roles",
        sa.Column(
            "crew_member_id",
            _uuid(),
            sa.ForeignKey("crew_members.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "role_id",
            _uuid(),
            sa.ForeignKey("crew_roles.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    # projects and events
    op.create_table(
        "projects",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("owner_id", sa.String(length=64), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_projects_owner_id", "projects", ["owner_id"])

    op.create_table(
        "event_types",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=16), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "project_events",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "project_id",
            _uuid(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column(
            "event_type_id", _uuid(), sa.ForeignKey("event_types.id"), nullable=True
        ),
        *_timestamps(),
    )
    op.create_index("ix_project_events_project_id", "project_events", ["project_id"])
    op.create_index("ix_project_events_date", "project_events", ["date"])

    op.create_table(
        "project_event_equipment",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "event_id",
            _uuid(),
            sa.ForeignKey("project_events.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "equipment_id",
            _uuid(),
            sa.ForeignKey("equipment.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("quantity", sa.Integer(), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_project_event_equipment_event_id", "project_event_equipment", ["event_id"]
    )
    op.create_index(
        "ix_project_event_equipment_equipment_id",
        "project_event_equipment",
        ["equipment_id"],
    )

    op.create_table(
        "project_event_roles",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column(
            "event_id",
            _uuid(),
            sa.ForeignKey("project_events.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "crew_member_id", _uuid(), sa.ForeignKey("crew_members.id"), nullable=True
        ),
        sa.Column("role_id", _uuid(), sa.ForeignKey("crew_roles.id"), nullable=True),
        sa.Column("daily_rate", sa.Numeric(10, 2), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_project_event_roles_event_id", "project_event_roles", ["event_id"]
    )
    op.create_index(
        "ix_project_event_roles_crew_member_id",
        "project_event_roles",
        ["crew_member_id"],
    )


def downgrade() -> None:
    # Drop in reverse order of dependencies
    op.drop_index("ix_project_event_roles_crew_member_id", table_name="project_event_roles")
    op.drop_index("ix_project_event_roles_event_id", table_name="project_event_roles")
    op.drop_table("project_event_roles")

    op.drop_index(
        "ix_project_event_equipment_equipment_id", table_name="project_event_equipment"
    )
    op.drop_index(
        "ix_project_event_equipment_event_id", table_name="project_event_equipment"
    )
    op.drop_table("project_event_equipment")

    op.drop_index("ix_project_events_date", table_name="project_events")
    op.drop_index("ix_project_events_project_id", table_name="project_events")
    op.drop_table("project_events")
    op.drop_table("event_types")

    op.drop_index("ix_projects_owner_id", table_name="projects")
    op.drop_table("projects")

    op.drop_table("crew_member_roles")
    op.drop_index("ix_crew_members_folder_id", table_name="crew_members")
    op.drop_table("crew_members")
    op.drop_table("crew_roles")
    op.drop_table("crew_folders")

    op.drop_index("ix_equipment_folder_id", table_name="equipment")
    op.drop_table("equipment")
    op.drop_index("ix_equipment_folders_parent_id", table_name="equipment_folders")
    op.drop_table("equipment_folders")
