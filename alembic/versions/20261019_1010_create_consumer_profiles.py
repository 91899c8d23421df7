"""create consumer_profiles table

Revision ID: 20261019_1010_create_consumer_profiles
Revises: 20261019_1000_create_catalog
Create Date: 2026-10-19 10:10:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261019_1010_create_consumer_profiles'
down_revision = '20261019_1000_create_catalog'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'consumer_profiles',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('visit_places', sa.JSON(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('consumer_profiles')
