"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "schemes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(256), nullable=False, unique=True),
        sa.Column("short_code", sa.String(32)),
        sa.Column("type", sa.String(32), nullable=False, server_default="SCHEME"),
        sa.Column("authority", sa.String(256)),
        sa.Column("jurisdiction", sa.String(64), nullable=False, server_default="Central"),
        sa.Column("description", sa.Text),
        sa.Column("benefits", sa.Text),
        sa.Column("eligibility", sa.Text),
        sa.Column("documents_url", sa.String(512)),
        sa.Column("sectors", sa.Text),
        sa.Column("company_sizes", sa.String(64)),
        sa.Column("pillar_e", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("pillar_s", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("pillar_g", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("priority", sa.Integer, nullable=False, server_default="5"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index("ix_schemes_short_code", "schemes", ["short_code"])
    op.create_index("ix_schemes_active_priority", "schemes", ["is_active", "priority"])

    op.create_table(
        "recommendation_log",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("sector", sa.String(256)),
        sa.Column("size", sa.String(32)),
        sa.Column("state", sa.String(64)),
        sa.Column("udyam_hash", sa.String(64)),
        sa.Column("udyam_valid", sa.Boolean, nullable=False, server_default=sa.text("false")),
        sa.Column("turnover_cr", sa.Float),
        sa.Column("compliance", sa.JSON),
        sa.Column("mandatory", sa.JSON),
        sa.Column("optional", sa.JSON),
        sa.Column("schemes", sa.JSON),
        sa.Column("rules_fired", sa.JSON),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index("ix_recommendation_log_udyam_hash", "recommendation_log", ["udyam_hash"])

    op.create_table(
        "legal_docs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("jurisdiction", sa.String(64), nullable=False, server_default="Central"),
        sa.Column("sector", sa.String(256)),
        sa.Column("location_tag", sa.String(128)),
        sa.Column("summary", sa.Text, nullable=False),
        sa.Column("url", sa.String(1024)),
        sa.Column("document_type", sa.String(32)),
        sa.Column("severity", sa.String(16)),
        sa.Column("tags", sa.Text),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )

    op.create_table(
        "user_schemes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("scheme_id", sa.Integer, sa.ForeignKey("schemes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(32), nullable=False),
        sa.Column("is_favorite", sa.Boolean, nullable=False),
        sa.Column("notes", sa.Text),
        sa.Column("applied_at", sa.DateTime(timezone=True)),
        sa.Column("completed_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
        sa.UniqueConstraint("user_id", "scheme_id", name="uq_user_scheme"),
    )
    op.create_index("ix_user_schemes_user_id", "user_schemes", ["user_id"])

    op.create_table(
        "esg_plans",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("name", sa.String(256), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("company_name", sa.String(256), nullable=False),
        sa.Column("sector", sa.String(256)),
        sa.Column("size", sa.String(32)),
        sa.Column("state", sa.String(64)),
        sa.Column("udyam_hash", sa.String(64)),
        sa.Column("turnover_cr", sa.Float),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("target_date", sa.Date),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index("ix_esg_plans_user_id", "esg_plans", ["user_id"])

    op.create_table(
        "esg_plan_items",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("plan_id", sa.Integer, sa.ForeignKey("esg_plans.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("pillar", sa.String(16)),
        sa.Column("priority", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("due_date", sa.Date),
        sa.Column("scheme_id", sa.Integer, sa.ForeignKey("schemes.id", ondelete="SET NULL")),
        sa.Column("scheme_code", sa.String(32)),
        sa.Column("order", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("NOW()")),
    )
    op.create_index("ix_esg_plan_items_plan_id", "esg_plan_items", ["plan_id"])

def downgrade():
    op.drop_index("ix_esg_plan_items_plan_id", table_name="esg_plan_items")
    op.drop_table("esg_plan_items")

    op.drop_index("ix_esg_plans_user_id", table_name="esg_plans")
    op.drop_table("esg_plans")

    op.drop_index("ix_user_schemes_user_id", table_name="user_schemes")
    op.drop_table("user_schemes")

    op.drop_table("legal_docs")

    op.drop_index("ix_recommendation_log_udyam_hash", table_name="recommendation_log")
    op.drop_table("recommendation_log")

    op.drop_index("ix_schemes_active_priority", table_name="schemes")
    op.drop_index("ix_schemes_short_code", table_name="schemes")
    op.drop_table("schemes")
