"""Initial schema

Revision ID: 001
Revises:
Create Date: 2024-01-01
"""
from alembic import op
import sqlalchemy as sa

revision = '001'
down_revision = None
branch_labels = None
depends_on = None

_READING_COLUMNS = [
    'v1', 'v2', 'v3',
    'i1', 'i2', 'i3',
    'pf1', 'pf2', 'pf3',
    'kva1', 'kva2', 'kva3', 'kvat',
    'kw1', 'kw2', 'kw3', 'kwt',
    'kvar1', 'kvar2', 'kvar3', 'kvart',
    'kvah', 'kwh', 'kvarh',
]


def upgrade() -> None:
    # Meter readings belong to the ingestion process; only create the table
    # on databases where it does not exist yet (local and test setups).
    inspector = sa.inspect(op.get_bind())
    if not inspector.has_table('meter_readings'):
        op.create_table(
            'meter_readings',
            sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column('meter_id', sa.String(50), nullable=False),
            *[sa.Column(name, sa.Float(), nullable=True) for name in _READING_COLUMNS],
            sa.Column('timestamp', sa.DateTime(), nullable=False),
        )
        op.create_index('ix_meter_readings_meter_id', 'meter_readings', ['meter_id'])
        op.create_index('ix_meter_readings_timestamp', 'meter_readings', ['timestamp'])
        op.create_index(
            'ix_meter_readings_meter_id_timestamp', 'meter_readings', ['meter_id', 'timestamp']
        )

    # Users
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(50), nullable=False, server_default='user'),
        sa.Column('customer_id', sa.String(50), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    # Alert acknowledgement state
    op.create_table(
        'alert_states',
        sa.Column('alert_id', sa.String(100), primary_key=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('updated_by', sa.Uuid(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_alert_states_status', 'alert_states', ['status'])

    # Audit Logs
    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=True),
        sa.Column('action', sa.String(100), nullable=False),
        sa.Column('resource_type', sa.String(50), nullable=True),
        sa.Column('resource_id', sa.String(100), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        sa.Column('ip_address', sa.String(45), nullable=True),
        sa.Column('user_agent', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_audit_logs_user_id', 'audit_logs', ['user_id'])
    op.create_index('ix_audit_logs_action', 'audit_logs', ['action'])
    op.create_index('ix_audit_logs_created_at', 'audit_logs', ['created_at'])


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('alert_states')
    op.drop_table('users')
