"""add_review_table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

Schema:
- review: One rating per booking, dropped with its booking or venue
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = '0002'
down_revision: Union[str, Sequence[str], None] = '0001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'review',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('venue_id', sa.Integer(), nullable=False),
        sa.Column('booking_id', UUID(as_uuid=True), nullable=False),
        sa.Column('rating', sa.SmallInteger(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False),
        sa.Column('reviewer_name', sa.String(length=255), nullable=False),
        sa.Column('is_anonymous', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        sa.Column(
            'created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.Column(
            'updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False
        ),
        sa.ForeignKeyConstraint(['venue_id'], ['venue.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['booking_id'], ['booking.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('booking_id'),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating_range'),
    )
    op.create_index(op.f('ix_review_user_id'), 'review', ['user_id'])
    op.create_index('ix_review_venue_created', 'review', ['venue_id', 'created_at'])


def downgrade() -> None:
    op.drop_index('ix_review_venue_created', table_name='review')
    op.drop_index(op.f('ix_review_user_id'), table_name='review')
    op.drop_table('review')
