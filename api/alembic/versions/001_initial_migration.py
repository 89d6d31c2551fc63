"""Initial migration

Revision ID: 001
Revises: 
Create Date: 2025-11-08 18:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create profiles table
    op.create_table(
        'profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=True),
        sa.Column('user_role', sa.Enum('MEMBER', 'DRIVER', 'ADMIN', 'SUPER_ADMIN', name='userrole'), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'INACTIVE', name='profilestatus'), nullable=False),
        sa.Column('member_id', sa.String(length=7), nullable=True),
        sa.Column('home_address', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_profiles_email'), 'profiles', ['email'], unique=True)
    op.create_index(op.f('ix_profiles_user_role'), 'profiles', ['user_role'], unique=False)
    op.create_index(op.f('ix_profiles_member_id'), 'profiles', ['member_id'], unique=True)

    # Create driver_profiles table
    op.create_table(
        'driver_profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('license_number', sa.String(length=100), nullable=False),
        sa.Column('vehicle_make', sa.String(length=100), nullable=False),
        sa.Column('vehicle_model', sa.String(length=100), nullable=False),
        sa.Column('vehicle_year', sa.String(length=10), nullable=False),
        sa.Column('vehicle_color', sa.String(length=50), nullable=False),
        sa.Column('vehicle_plate', sa.String(length=20), nullable=False),
        sa.Column('status', sa.Enum('ACTIVE', 'INACTIVE', 'ON_BREAK', name='driverstatus'), nullable=False),
        sa.Column('completed_rides', sa.Integer(), nullable=False),
        sa.Column('total_miles', sa.Float(), nullable=False),
        sa.Column('weekly_stars_count', sa.Integer(), nullable=False),
        sa.Column('total_stars', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )

    # Create rides table
    op.create_table(
        'rides',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('trip_id', sa.String(length=20), nullable=True),
        sa.Column('member_id', sa.Uuid(), nullable=False),
        sa.Column('driver_id', sa.Uuid(), nullable=True),
        sa.Column('pickup_address', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('dropoff_address', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('scheduled_pickup_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('appointment_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('provider_name', sa.String(length=255), nullable=True),
        sa.Column('provider_address', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('payment_method', sa.Enum('CASH', 'CREDIT', 'INSURANCE', name='paymentmethod'), nullable=False),
        sa.Column('payment_status', sa.Enum('PENDING', 'COMPLETED', 'FAILED', name='paymentstatus'), nullable=False),
        sa.Column('status', sa.Enum(
            'PENDING', 'ASSIGNED', 'STARTED', 'PICKED_UP', 'COMPLETED',
            'RETURN_PENDING', 'RETURN_STARTED', 'RETURN_PICKED_UP', 'RETURN_COMPLETED', 'CANCELLED',
            name='ridestatus'), nullable=False),
        sa.Column('recurring', sa.Enum('NONE', 'DAILY', 'WEEKLY', 'MONTHLY', name='recurrence'), nullable=False),
        sa.Column('recurring_pattern', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('provider_fee', sa.Float(), nullable=True),
        sa.Column('driver_earnings', sa.Float(), nullable=True),
        sa.Column('insurance_claim_amount', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['profiles.id'], ),
        sa.ForeignKeyConstraint(['driver_id'], ['profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_rides_trip_id'), 'rides', ['trip_id'], unique=True)
    op.create_index(op.f('ix_rides_member_id'), 'rides', ['member_id'], unique=False)
    op.create_index(op.f('ix_rides_driver_id'), 'rides', ['driver_id'], unique=False)
    op.create_index(op.f('ix_rides_scheduled_pickup_time'), 'rides', ['scheduled_pickup_time'], unique=False)
    op.create_index(op.f('ix_rides_status'), 'rides', ['status'], unique=False)

    # Create call_logs table
    op.create_table(
        'call_logs',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('call_id', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=50), nullable=False),
        sa.Column('caller_id', sa.Uuid(), nullable=True),
        sa.Column('call_type', sa.Enum('INBOUND', 'OUTBOUND', name='calltype'), nullable=False),
        sa.Column('duration', sa.Float(), nullable=True),
        sa.Column('recording_url', sa.Text(), nullable=True),
        sa.Column('end_timestamp', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['caller_id'], ['profiles.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_call_logs_call_id'), 'call_logs', ['call_id'], unique=True)
    op.create_index(op.f('ix_call_logs_caller_id'), 'call_logs', ['caller_id'], unique=False)

    # Create call_transcripts table
    op.create_table(
        'call_transcripts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('call_id', sa.String(length=255), nullable=False),
        sa.Column('transcript', sa.Text(), nullable=False),
        sa.Column('is_final', sa.Boolean(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_call_transcripts_call_id'), 'call_transcripts', ['call_id'], unique=False)
    op.create_index(op.f('ix_call_transcripts_timestamp'), 'call_transcripts', ['timestamp'], unique=False)

    # Create webhook_events table
    op.create_table(
        'webhook_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('source', sa.String(length=255), nullable=False),
        sa.Column('event_type', sa.String(length=100), nullable=True),
        sa.Column('payload', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('status', sa.Enum('RECEIVED', 'PROCESSED', 'ERROR', name='webhookstatus'), nullable=False),
        sa.Column('error_message', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_webhook_events_event_type'), 'webhook_events', ['event_type'], unique=False)


def downgrade() -> None:
    op.drop_table('webhook_events')
    op.drop_table('call_transcripts')
    op.drop_table('call_logs')
    op.drop_table('rides')
    op.drop_table('driver_profiles')
    op.drop_table('profiles')

    for enum_name in (
        'webhookstatus', 'calltype', 'recurrence', 'ridestatus', 'paymentstatus',
        'paymentmethod', 'driverstatus', 'profilestatus', 'userrole',
    ):
        op.execute(f"DROP TYPE IF EXISTS {enum_name}")
