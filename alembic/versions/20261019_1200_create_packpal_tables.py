"""create users, trips, packing_lists and feedback tables

Revision ID: 20261019_1200_create_packpal_tables
Revises:
Create Date: 2026-10-19 12:00:00
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision = '20261019_1200_create_packpal_tables'
down_revision = None
branch_labels = None
depends_on = None

JSON_DOC = sa.JSON().with_variant(JSONB(), 'postgresql')

user_role = sa.Enum('USER', 'ADMIN', name='userrole')
trip_type = sa.Enum('BUSINESS', 'LEISURE', 'ADVENTURE', 'FAMILY', 'SOLO', name='triptype')
feedback_category = sa.Enum(
    'PACKING_SUGGESTIONS', 'WEATHER_ACCURACY', 'ATTRACTIONS', 'OVERALL', 'OTHER',
    name='feedbackcategory',
)


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('role', user_role, nullable=False, server_default='USER'),
        sa.Column('profile', JSON_DOC, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'trips',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('city', sa.String(120), nullable=False),
        sa.Column('country', sa.String(120), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True),
        sa.Column('longitude', sa.Float(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('trip_type', trip_type, nullable=False),
        sa.Column('weather_forecast', JSON_DOC, nullable=False),
        sa.Column('attractions', JSON_DOC, nullable=False),
        sa.Column('ai_suggestions', JSON_DOC, nullable=True),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_trips_user_id', 'trips', ['user_id'])
    op.create_index('ix_trips_start_date', 'trips', ['start_date'])
    op.create_index('ix_trips_is_public', 'trips', ['is_public'])

    op.create_table(
        'packing_lists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('trip_id', sa.Integer(), sa.ForeignKey('trips.id', ondelete='CASCADE'), nullable=False),
        sa.Column('categories', JSON_DOC, nullable=False),
        sa.Column('completion_percentage', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_packing_lists_trip_id', 'packing_lists', ['trip_id'], unique=True)

    op.create_table(
        'feedback',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('trip_id', sa.Integer(), sa.ForeignKey('trips.id', ondelete='SET NULL'), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', feedback_category, nullable=False, server_default='OVERALL'),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('liked_by', JSON_DOC, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_feedback_user_id', 'feedback', ['user_id'])
    op.create_index('ix_feedback_trip_id', 'feedback', ['trip_id'])
    op.create_index('ix_feedback_category', 'feedback', ['category'])
    op.create_index('ix_feedback_is_public', 'feedback', ['is_public'])


def downgrade() -> None:
    op.drop_table('feedback')
    op.drop_table('packing_lists')
    op.drop_table('trips')
    op.drop_table('users')
    feedback_category.drop(op.get_bind(), checkfirst=True)
    trip_type.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
