"""Initial schema for menu, orders and reservations

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-18

Column names follow the existing Spanish-named tables (nombre, precio,
telefono, ...). Dietary flags are "si"/"no" strings and order totals are
text, matching the rows already in production.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create menu table
    op.create_table(
        'menu',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('nombre', sa.String(255), nullable=False),
        sa.Column('ingredientes', sa.Text(), nullable=True),
        sa.Column('precio', sa.Numeric(10, 2), nullable=False),
        sa.Column('categoria', sa.String(100), nullable=True),
        sa.Column('stock', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('vegetariano', sa.String(3), nullable=False, server_default='no'),
        sa.Column('gluten', sa.String(3), nullable=False, server_default='no'),
        sa.Column('marisco', sa.String(3), nullable=False, server_default='no'),
        sa.Column('lactosa', sa.String(3), nullable=False, server_default='no'),
        sa.Column('vegano', sa.String(3), nullable=False, server_default='no'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
        sa.CheckConstraint('stock >= 0', name='ck_menu_stock_non_negative'),
        sa.CheckConstraint('precio >= 0', name='ck_menu_price_non_negative'),
    )

    # Create orders table
    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('nombre', sa.String(255), nullable=False),
        sa.Column('telefono', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('direccion', sa.String(255), nullable=True),
        sa.Column('items', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('total', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('time', sa.String(8), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('idx_orders_created_at', 'orders', ['created_at'])

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('customer_name', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=False),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('people', sa.Integer(), nullable=False),
        sa.Column('table_number', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='confirmed'),
        sa.Column('google_event_id', sa.String(255), nullable=True),
        sa.Column('observations', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('idx_reservations_date_status', 'reservations', ['date', 'status'])


def downgrade() -> None:
    op.drop_index('idx_reservations_date_status', table_name='reservations')
    op.drop_table('reservations')
    op.drop_index('idx_orders_created_at', table_name='orders')
    op.drop_table('orders')
    op.drop_table('menu')
