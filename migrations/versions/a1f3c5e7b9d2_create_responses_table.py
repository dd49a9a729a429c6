"""create responses table

Revision ID: a1f3c5e7b9d2
Revises:
Create Date: 2026-10-18
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision: str = "a1f3c5e7b9d2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Existing responses.db files (and databases bootstrapped by create_all()) already have the table.
    if inspect(op.get_bind()).has_table("responses"):
        return
    op.create_table(
        "responses",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("parentName", sa.Text(), nullable=True),
        sa.Column("childAge", sa.Text(), nullable=True),
        sa.Column("tuitionReason", sa.Text(), nullable=True),
        sa.Column("needs", sa.Text(), nullable=True),
        sa.Column("otherNeeds", sa.Text(), nullable=True),
        sa.Column("contactMethod", sa.Text(), nullable=True),
        sa.Column("phoneNumber", sa.Text(), nullable=True),
        sa.Column("emailAddress", sa.Text(), nullable=True),
        sa.Column("otherContact", sa.Text(), nullable=True),
        sa.Column("actioned", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("submittedAt", sa.DateTime(), nullable=False, server_default=sa.func.current_timestamp()),
        sqlite_autoincrement=True,
    )


def downgrade() -> None:
    op.drop_table("responses")
