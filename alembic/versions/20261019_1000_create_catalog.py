"""create places, hotels and artisan tables

Revision ID: 20261019_1000_create_catalog
Revises:
Create Date: 2026-10-19 10:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261019_1000_create_catalog'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'places',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('category', sa.String(64), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=False, index=True),
        sa.Column('longitude', sa.Float(), nullable=False, index=True),
        sa.Column('city', sa.String(128), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=True),
        sa.Column('google_map_link', sa.String(512), nullable=True),
    )
    op.create_table(
        'hotels',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('latitude', sa.Float(), nullable=True, index=True),
        sa.Column('longitude', sa.Float(), nullable=True, index=True),
        sa.Column('rating', sa.Float(), nullable=True),
    )
    op.create_table(
        'artifacts',
        sa.Column('artisan_id', sa.String(36), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(32), nullable=True),
        sa.Column('products', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade() -> None:
    op.drop_table('artifacts')
    op.drop_table('hotels')
    op.drop_table('places')
