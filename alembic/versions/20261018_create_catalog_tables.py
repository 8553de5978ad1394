"""create_catalog_tables

Revision ID: 001_create_catalog
Revises:
Create Date: 2026-10-18

Creates the categories and products tables. Products reference categories
through category_id; the gallery (images) is stored as a JSON array.

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_create_catalog'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'categories',
        sa.Column('category_id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('icon', sa.String(255), nullable=True),
        sa.Column('color', sa.String(50), nullable=True),
    )

    op.create_table(
        'products',
        sa.Column('product_id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('rich_description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(1024), nullable=False, server_default=''),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('brand', sa.String(255), nullable=True),
        sa.Column('price', sa.Float(), nullable=True),
        sa.Column(
            'category_id',
            sa.Uuid(),
            sa.ForeignKey('categories.category_id'),
            nullable=False,
        ),
        sa.Column('count_in_stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rating', sa.Float(), nullable=False, server_default='0'),
        sa.Column('num_reviews', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint('count_in_stock >= 0', name='chk_product_stock_non_negative'),
    )

    op.create_index('idx_products_category', 'products', ['category_id'])
    op.create_index('idx_products_featured', 'products', ['is_featured'])


def downgrade() -> None:
    op.drop_index('idx_products_featured', table_name='products')
    op.drop_index('idx_products_category', table_name='products')
    op.drop_table('products')
    op.drop_table('categories')
