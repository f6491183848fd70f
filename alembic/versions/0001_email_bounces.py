"""create email bounces

Revision ID: 0001_email_bounces
Revises: 
Create Date: 2026-10-19 00:00:00.000000
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_email_bounces"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "email_bounces",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("bounce_type", sa.SmallInteger(), nullable=False),
        sa.Column("bounce_sub_type", sa.SmallInteger(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_email_bounces_email"), "email_bounces", ["email"], unique=False)
    op.create_index(op.f("ix_email_bounces_created_at"), "email_bounces", ["created_at"], unique=False)


def downgrade():
    op.drop_index(op.f("ix_email_bounces_created_at"), table_name="email_bounces")
    op.drop_index(op.f("ix_email_bounces_email"), table_name="email_bounces")
    op.drop_table("email_bounces")
