"""Create products table.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create products table."""
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('code', sa.String(50), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rating', sa.Numeric(2, 1), nullable=False, server_default='0.0'),
        sa.Column('inventory_status', sa.String(20), nullable=False, server_default='INSTOCK'),
        sa.Column('image', sa.String(500), nullable=True),
        sa.Column('deleted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    # Codes are unique across archived products too
    op.create_index('ix_products_code', 'products', ['code'], unique=True)
    op.create_index('ix_products_category', 'products', ['category'])
    op.create_index('ix_products_inventory_status', 'products', ['inventory_status'])
    op.create_index('ix_products_deleted', 'products', ['deleted'])


def downgrade() -> None:
    """Drop products table."""
    op.drop_index('ix_products_deleted', table_name='products')
    op.drop_index('ix_products_inventory_status', table_name='products')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_index('ix_products_code', table_name='products')
    op.drop_table('products')
