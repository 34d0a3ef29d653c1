"""init_turf_booking_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- venue: Turf venues with opening hours, lunch break and pricing
- slot: Bookable time slots (minutes from midnight) with the reserved flag
- booking: One booking per reserved slot, UUID7 primary key
- reservation_request: Idempotency records for reservation requests
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
    ]


def upgrade() -> None:
    """Create all tables with final schema."""

    op.create_table(
        'venue',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('owner_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('location', sa.String(length=255), nullable=False),
        sa.Column('sport', sa.String(length=50), nullable=False),
        sa.Column('base_price', sa.Integer(), nullable=False),
        sa.Column('advance_amount', sa.Integer(), nullable=False),
        sa.Column('open_hour', sa.Integer(), nullable=False),
        sa.Column('close_hour', sa.Integer(), nullable=False),
        sa.Column('slot_duration', sa.Integer(), nullable=False),
        sa.Column('lunch_from_hour', sa.Integer(), nullable=True),
        sa.Column('lunch_to_hour', sa.Integer(), nullable=True),
        sa.Column('pin_lat', sa.Float(), nullable=True),
        sa.Column('pin_lng', sa.Float(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_venue_owner_id'), 'venue', ['owner_id'])

    op.create_table(
        'slot',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_minute', sa.Integer(), nullable=False),
        sa.Column('end_minute', sa.Integer(), nullable=False),
        sa.Column('is_booked', sa.Boolean(), nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), nullable=True),
        sa.Column('reserved_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('venue_id', 'date', 'start_minute', name='uq_slot_venue_date_start'),
    )
    op.create_index('ix_slot_venue_date', 'slot', ['venue_id', 'date'])
    # Only reserved-but-unlinked slots are scanned by the reconcile job
    op.create_index(
        'ix_slot_orphan_scan',
        'slot',
        ['reserved_at'],
        postgresql_where=sa.text('is_booked AND booking_id IS NULL'),
    )

    op.create_table(
        'booking',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('slot_id', sa.Integer(), nullable=False),
        sa.Column('payer_name', sa.String(length=255), nullable=False),
        sa.Column('payer_email', sa.String(length=255), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('amount_received', sa.Integer(), nullable=False),
        sa.Column('amount_remaining', sa.Integer(), nullable=False),
        sa.Column('is_payment_received', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['slot_id'], ['slot.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slot_id'),
    )
    op.create_index(op.f('ix_booking_user_id'), 'booking', ['user_id'])
    op.create_index(op.f('ix_booking_venue_id'), 'booking', ['venue_id'])

    op.create_table(
        'reservation_request',
        sa.Column('token', sa.String(length=255), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('fingerprint', sa.String(length=2048), nullable=False),
        sa.Column('state', sa.String(length=20), nullable=False),
        sa.Column('result', JSONB(), nullable=True),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.PrimaryKeyConstraint('token'),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table('reservation_request')
    op.drop_index(op.f('ix_booking_venue_id'), table_name='booking')
    op.drop_index(op.f('ix_booking_user_id'), table_name='booking')
    op.drop_table('booking')
    op.drop_index('ix_slot_orphan_scan', table_name='slot')
    op.drop_index('ix_slot_venue_date', table_name='slot')
    op.drop_table('slot')
    op.drop_index(op.f('ix_venue_owner_id'), table_name='venue')
    op.drop_table('venue')
