"""Create cafe POS tables

Revision ID: 0001_create_cafe_pos_tables
Revises:
Create Date: 2026-10-19 09:00:00
"""

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_create_cafe_pos_tables'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'areas',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('sort', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_areas_id', 'areas', ['id'])

    op.create_table(
        'cafe_tables',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('area_id', sa.Integer(), sa.ForeignKey('areas.id'), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='empty'),
        sa.UniqueConstraint('area_id', 'name', name='uix_cafe_table_area_name'),
        sa.CheckConstraint("status IN ('empty', 'in_use')", name='chk_cafe_table_status'),
    )
    op.create_index('ix_cafe_tables_id', 'cafe_tables', ['id'])
    op.create_index('ix_cafe_tables_area_id', 'cafe_tables', ['area_id'])

    op.create_table(
        'menu_groups',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('sort', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_menu_groups_id', 'menu_groups', ['id'])

    op.create_table(
        'menu_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('group_id', sa.Integer(),
                  sa.ForeignKey('menu_groups.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('sort', sa.Integer(), nullable=False, server_default='0'),
        sa.CheckConstraint('price > 0', name='chk_menu_item_price_positive'),
    )
    op.create_index('ix_menu_items_id', 'menu_items', ['id'])
    op.create_index('ix_menu_items_group_id', 'menu_items', ['group_id'])

    op.create_table(
        'orders',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('table_id', sa.Integer(), sa.ForeignKey('cafe_tables.id'), nullable=False),
        sa.Column('table_name', sa.String(50), nullable=False),
        sa.Column('status', sa.String(20), nullable=False, server_default='open'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("status IN ('open', 'paid')", name='chk_order_status'),
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_table_id', 'orders', ['table_id'])
    op.create_index('ix_orders_status', 'orders', ['status'])
    op.create_index('ix_orders_created_at', 'orders', ['created_at'])
    # At most one open order per table
    op.create_index(
        'uq_orders_open_per_table', 'orders', ['table_id'],
        unique=True,
        postgresql_where=sa.text("status = 'open'"),
        sqlite_where=sa.text("status = 'open'"),
    )

    op.create_table(
        'order_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(),
                  sa.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_name', sa.String(200), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        sa.Column('qty', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('qty >= 1', name='chk_order_item_qty'),
        sa.CheckConstraint('price >= 0', name='chk_order_item_price'),
    )
    op.create_index('ix_order_items_id', 'order_items', ['id'])
    op.create_index('ix_order_items_order_id', 'order_items', ['order_id'])

    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('order_id', sa.Integer(), sa.ForeignKey('orders.id'), nullable=False),
        sa.Column('method', sa.String(20), nullable=False),
        sa.Column('paid_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('paid_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("method IN ('cash', 'transfer')", name='chk_payment_method'),
        sa.CheckConstraint('paid_amount > 0', name='chk_payment_amount_positive'),
    )
    op.create_index('ix_payments_id', 'payments', ['id'])
    op.create_index('ix_payments_order_id', 'payments', ['order_id'], unique=True)
    op.create_index('ix_payments_paid_at', 'payments', ['paid_at'])


def downgrade():
    op.drop_table('payments')
    op.drop_table('order_items')
    op.drop_index('uq_orders_open_per_table', table_name='orders')
    op.drop_table('orders')
    op.drop_table('menu_items')
    op.drop_table('menu_groups')
    op.drop_table('cafe_tables')
    op.drop_table('areas')
