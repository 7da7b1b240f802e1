"""initial_schema

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-17 10:12:44.318207

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('user', 'admin', name='userrole')
subscription_tier = sa.Enum('free', 'pro', name='subscriptiontier')
threat_sensitivity = sa.Enum('low', 'medium', 'high', name='threatsensitivity')
threat_level = sa.Enum('safe', 'warning', 'danger', name='threatlevel')
session_status = sa.Enum('active', 'completed', 'terminated', 'deleted', name='sessionstatus')
chat_role = sa.Enum('user', 'assistant', name='chatrole')
payment_status = sa.Enum('pending', 'completed', 'failed', name='paymentstatus')
# payments reuses the type created with the users table
existing_subscription_tier = sa.Enum('free', 'pro', name='subscriptiontier').with_variant(
    postgresql.ENUM('free', 'pro', name='subscriptiontier', create_type=False), 'postgresql'
)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('email', sa.String(320), nullable=False),
        sa.Column('name', sa.String(), nullable=True),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('role', user_role, nullable=False),
        sa.Column('subscription_tier', subscription_tier, nullable=False),
        sa.Column('subscription_expiry', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('last_signed_in', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'admin_action_logs',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('admin_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
    )

    op.create_table(
        'user_settings',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False, unique=True),
        sa.Column('auto_delete_sessions', sa.Boolean(), nullable=False),
        sa.Column('delete_after_minutes', sa.Integer(), nullable=False),
        sa.Column('block_trackers', sa.Boolean(), nullable=False),
        sa.Column('block_ads', sa.Boolean(), nullable=False),
        sa.Column('block_malware', sa.Boolean(), nullable=False),
        sa.Column('enable_ai_assistant', sa.Boolean(), nullable=False),
        sa.Column('preferred_vpn_country', sa.String(100), nullable=True),
        sa.Column('threat_sensitivity', threat_sensitivity, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    )

    op.create_table(
        'vpn_locations',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('country', sa.String(100), nullable=False),
        sa.Column('country_code', sa.String(2), nullable=False),
        sa.Column('city', sa.String(100), nullable=False),
        sa.Column('latitude', sa.String(20), nullable=False),
        sa.Column('longitude', sa.String(20), nullable=False),
        sa.Column('ip_pool', sa.JSON(), nullable=False),
        sa.Column('latency_min', sa.Integer(), nullable=False),
        sa.Column('latency_max', sa.Integer(), nullable=False),
        sa.Column('is_pro', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint('latency_min <= latency_max', name='ck_vpn_latency_range'),
    )

    op.create_table(
        'sessions',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('vpn_ip', sa.String(45), nullable=True),
        sa.Column('vpn_location', sa.String(200), nullable=True),
        sa.Column('vpn_country', sa.String(100), nullable=True),
        sa.Column('vpn_latitude', sa.String(20), nullable=True),
        sa.Column('vpn_longitude', sa.String(20), nullable=True),
        sa.Column('threat_level', threat_level, nullable=False),
        sa.Column('threat_details', sa.JSON(), nullable=True),
        sa.Column('status', session_status, nullable=False),
        sa.Column('auto_delete_at', sa.DateTime(), nullable=True),
        sa.Column('started_at', sa.DateTime(), nullable=False),
        sa.Column('ended_at', sa.DateTime(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_sessions_user_id', 'sessions', ['user_id'])
    op.create_index('ix_sessions_status', 'sessions', ['status'])

    op.create_table(
        'threats',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('session_id', sa.String(64), sa.ForeignKey('sessions.id'), nullable=False),
        sa.Column('threat_type', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('confidence', sa.Integer(), nullable=False),
        sa.Column('blocked', sa.Boolean(), nullable=False),
        sa.Column('detected_at', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_threats_session_id', 'threats', ['session_id'])

    op.create_table(
        'chat_messages',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('session_id', sa.String(64), sa.ForeignKey('sessions.id'), nullable=False),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('role', chat_role, nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_chat_messages_session_id', 'chat_messages', ['session_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(3), nullable=False),
        sa.Column('status', payment_status, nullable=False),
        sa.Column('subscription_tier', existing_subscription_tier, nullable=False),
        sa.Column('subscription_months', sa.Integer(), nullable=False),
        sa.Column('payment_method', sa.String(50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('expiration_time', sa.DateTime(), nullable=False),
    )
    op.create_index('ix_payments_user_id', 'payments', ['user_id'])


def downgrade() -> None:
    op.drop_index('ix_payments_user_id', table_name='payments')
    op.drop_table('payments')
    op.drop_index('ix_chat_messages_session_id', table_name='chat_messages')
    op.drop_table('chat_messages')
    op.drop_index('ix_threats_session_id', table_name='threats')
    op.drop_table('threats')
    op.drop_index('ix_sessions_status', table_name='sessions')
    op.drop_index('ix_sessions_user_id', table_name='sessions')
    op.drop_table('sessions')
    op.drop_table('vpn_locations')
    op.drop_table('user_settings')
    op.drop_table('admin_action_logs')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    bind = op.get_bind()
    for enum_type in (payment_status, chat_role, session_status, threat_level,
                      threat_sensitivity, subscription_tier, user_role):
        enum_type.drop(bind, checkfirst=True)
