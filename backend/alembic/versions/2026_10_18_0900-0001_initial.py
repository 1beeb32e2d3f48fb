"""create users and gadgets

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

gadget_status = sa.Enum('Available', 'Deployed', 'Destroyed', 'Decommissioned', name='gadget_status')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=1024), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'gadgets',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('codename', sa.String(length=255), nullable=False),
        sa.Column('status', gadget_status, nullable=False),
        sa.Column('decommissioned_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_gadgets_status', 'gadgets', ['status'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_gadgets_status', table_name='gadgets')
    op.drop_table('gadgets')
    gadget_status.drop(op.get_bind(), checkfirst=True)
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
