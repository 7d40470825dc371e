"""Add quote priorities

Revision ID: 002
Revises: 001
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'quote_priorities',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('quote_id', sa.Integer(), nullable=False, unique=True),
        sa.Column('speed_of_closing', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('low_fees', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('high_leverage', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('comments', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['quote_id'], ['quotes.id'], ondelete='CASCADE'),
    )


def downgrade() -> None:
    op.drop_table('quote_priorities')
