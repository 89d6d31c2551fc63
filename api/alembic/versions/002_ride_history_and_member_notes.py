"""Ride status history and member notes

Revision ID: 002
Revises: 001
Create Date: 2025-11-20 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '002'
down_revision = '001'
branch_labels = None
depends_on = None

# ridestatus already exists from 001
ride_status = postgresql.ENUM(
    'PENDING', 'ASSIGNED', 'STARTED', 'PICKED_UP', 'COMPLETED',
    'RETURN_PENDING', 'RETURN_STARTED', 'RETURN_PICKED_UP', 'RETURN_COMPLETED', 'CANCELLED',
    name='ridestatus', create_type=False,
)


def upgrade() -> None:
    op.create_table(
        'ride_status_history',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('ride_id', sa.Integer(), nullable=False),
        sa.Column('previous_status', ride_status, nullable=True),
        sa.Column('new_status', ride_status, nullable=False),
        sa.Column('changed_by', sa.Uuid(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['ride_id'], ['rides.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['changed_by'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_ride_status_history_ride_id'), 'ride_status_history', ['ride_id'], unique=False)
    op.create_index(op.f('ix_ride_status_history_created_at'), 'ride_status_history', ['created_at'], unique=False)

    op.create_table(
        'member_notes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Uuid(), nullable=False),
        sa.Column('author_id', sa.Uuid(), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['profiles.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_member_notes_member_id'), 'member_notes', ['member_id'], unique=False)


def downgrade() -> None:
    op.drop_table('member_notes')
    op.drop_table('ride_status_history')
