"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def _notification_audit() -> list[sa.Column]:
    return [
        sa.Column('notification_sent', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('notification_method', sa.String(length=20), nullable=True),
        sa.Column('notification_sent_at', sa.DateTime(), nullable=True),
        sa.Column('notification_content', sa.Text(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('amenities', sa.JSON(), nullable=True),
        sa.Column('settings', sa.JSON(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'company_staff_members',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('email', sa.String(length=255), nullable=False, index=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('uid', sa.String(length=255), nullable=False, unique=True, index=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('display_name', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=50), nullable=False, server_default='concierge'),
        sa.Column('preferences', sa.JSON(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'residents',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('unit_number', sa.String(length=50), nullable=False, index=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True, index=True),
        sa.Column('emergency_contact', sa.JSON(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'bookings',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('amenity_id', sa.String(length=100), nullable=False),
        sa.Column('resident_id', sa.Integer(), nullable=True, index=True),
        sa.Column('start_date', sa.DateTime(), nullable=False, index=True),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('contact_info', sa.JSON(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='confirmed'),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'packages',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('resident_id', sa.Integer(), nullable=True, index=True),
        sa.Column('resident_name', sa.String(length=255), nullable=False),
        sa.Column('unit_number', sa.String(length=50), nullable=False, index=True),
        sa.Column('recipient_email', sa.String(length=255), nullable=True),
        sa.Column('recipient_phone', sa.String(length=50), nullable=True),
        sa.Column('courier', sa.String(length=100), nullable=True),
        sa.Column('tracking_number', sa.String(length=255), nullable=True),
        sa.Column('package_type', sa.String(length=50), nullable=True),
        sa.Column('size', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('delivered_at', sa.DateTime(), nullable=False),
        sa.Column('received_by', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        *_notification_audit(),
        sa.Column('pickup_by', sa.String(length=255), nullable=True),
        sa.Column('picked_up_at', sa.DateTime(), nullable=True),
        sa.Column('pickup_notes', sa.Text(), nullable=True),
        sa.Column('verification_method', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now(), index=True),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        'visitors',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('visiting', sa.JSON(), nullable=False),
        sa.Column('purpose', sa.String(length=255), nullable=True),
        sa.Column('expected_arrival', sa.DateTime(), nullable=True, index=True),
        sa.Column('expected_departure', sa.DateTime(), nullable=True),
        sa.Column('actual_arrival', sa.DateTime(), nullable=True),
        sa.Column('actual_departure', sa.DateTime(), nullable=True),
        sa.Column('parking_required', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('vehicle_info', sa.JSON(), nullable=True),
        sa.Column('parking_spot', sa.String(length=50), nullable=True),
        sa.Column('access_code', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pre_registered'),
        sa.Column('checked_in_by', sa.String(length=255), nullable=True),
        *_notification_audit(),
        *_timestamps(),
    )

    op.create_table(
        'parking_requests',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('requester_name', sa.String(length=255), nullable=False),
        sa.Column('requester_phone', sa.String(length=50), nullable=True),
        sa.Column('requester_email', sa.String(length=255), nullable=True),
        sa.Column('visiting', sa.JSON(), nullable=False),
        sa.Column('vehicle_info', sa.JSON(), nullable=True),
        sa.Column('requested_date', sa.DateTime(), nullable=False, index=True),
        sa.Column('start_time', sa.String(length=5), nullable=False),
        sa.Column('end_time', sa.String(length=5), nullable=False),
        sa.Column('purpose', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('approved_by', sa.String(length=255), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('parking_spot', sa.String(length=50), nullable=True),
        sa.Column('access_code', sa.String(length=50), nullable=True),
        *_notification_audit(),
        *_timestamps(),
    )

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('phone_number', sa.String(length=50), nullable=False, index=True),
        sa.Column('resident_id', sa.Integer(), nullable=True, index=True),
        sa.Column('resident_name', sa.String(length=255), nullable=True),
        sa.Column('unit_number', sa.String(length=50), nullable=True),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('direction', sa.String(length=20), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='sms'),
        sa.Column('status', sa.String(length=50), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('read_at', sa.DateTime(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False, index=True),
        sa.Column('reply_to', sa.Integer(), sa.ForeignKey('messages.id'), nullable=True),
        sa.Column('external_sid', sa.String(length=255), nullable=True, index=True),
        sa.Column('sent_by', sa.String(length=255), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'call_logs',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('phone_number', sa.String(length=50), nullable=False, index=True),
        sa.Column('resident_id', sa.Integer(), nullable=True, index=True),
        sa.Column('resident_name', sa.String(length=255), nullable=True),
        sa.Column('unit_number', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='answered'),
        sa.Column('duration', sa.String(length=20), nullable=True),
        sa.Column('summary', sa.Text(), nullable=True),
        sa.Column('ai_summary', sa.Text(), nullable=True),
        sa.Column('transcription', sa.Text(), nullable=True),
        sa.Column('external_call_id', sa.String(length=255), nullable=True, index=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('timestamp', sa.DateTime(), nullable=False, index=True),
        *_timestamps(),
    )

    op.create_table(
        'issues',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=True),
        sa.Column('priority', sa.String(length=20), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='open'),
        sa.Column('unit_number', sa.String(length=50), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'activity_logs',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id'), nullable=False, index=True),
        sa.Column('type', sa.String(length=50), nullable=False, index=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('entity_type', sa.String(length=50), nullable=True),
        sa.Column('entity_id', sa.Integer(), nullable=True),
        sa.Column('details', sa.JSON(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table('activity_logs')
    op.drop_table('issues')
    op.drop_table('call_logs')
    op.drop_table('messages')
    op.drop_table('parking_requests')
    op.drop_table('visitors')
    op.drop_table('packages')
    op.drop_table('bookings')
    op.drop_table('residents')
    op.drop_table('user_profiles')
    op.drop_table('company_staff_members')
    op.drop_table('companies')
