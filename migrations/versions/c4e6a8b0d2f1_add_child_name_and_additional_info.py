"""add childName and additionalInfo to responses

Revision ID: c4e6a8b0d2f1
Revises: a1f3c5e7b9d2
Create Date: 2026-10-18

The enquiry form grew two fields after launch.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


revision: str = "c4e6a8b0d2f1"
down_revision: Union[str, Sequence[str], None] = "a1f3c5e7b9d2"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _add_column_if_missing(table: str, col: sa.Column) -> None:
    bind = op.get_bind()
    insp = inspect(bind)
    if not insp.has_table(table):
        return
    cols = {c["name"] for c in insp.get_columns(table)}
    if col.name not in cols:
        with op.batch_alter_table(table) as batch_op:
            batch_op.add_column(col)


def upgrade() -> None:
    _add_column_if_missing("responses", sa.Column("childName", sa.Text(), nullable=True))
    _add_column_if_missing("responses", sa.Column("additionalInfo", sa.Text(), nullable=True))


def downgrade() -> None:
    bind = op.get_bind()
    insp = inspect(bind)
    if not insp.has_table("responses"):
        return
    cols = {c["name"] for c in insp.get_columns("responses")}
    for name in ("additionalInfo", "childName"):
        if name in cols:
            with op.batch_alter_table("responses") as batch_op:
                batch_op.drop_column(name)
