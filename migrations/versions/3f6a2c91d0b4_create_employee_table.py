"""create employee table

Revision ID: 3f6a2c91d0b4
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f6a2c91d0b4'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'employee',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('designation', sa.String(length=100), nullable=False),
        sa.Column('basic_salary', sa.Numeric(), nullable=False, server_default='0'),
        sa.Column('hra', sa.Numeric(), nullable=False, server_default='0'),
        sa.Column('da', sa.Numeric(), nullable=False, server_default='0'),
        sa.Column('deductions', sa.Numeric(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    op.drop_table('employee')
