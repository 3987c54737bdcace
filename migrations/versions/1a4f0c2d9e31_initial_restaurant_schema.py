"""initial restaurant schema

Revision ID: 1a4f0c2d9e31
Revises:
Create Date: 2026-10-18 09:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '1a4f0c2d9e31'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'address',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('street', sa.String(length=255), nullable=False),
        sa.Column('city', sa.String(length=100), nullable=False),
        sa.Column('zip_code', sa.String(length=20), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_address_user_id', 'address', ['user_id'])
    op.create_index(
        'uq_address_default_per_user',
        'address',
        ['user_id'],
        unique=True,
        sqlite_where=sa.text('is_default'),
        postgresql_where=sa.text('is_default'),
    )
    op.create_table(
        'category',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('uq_category_name_lower', 'category', [sa.text('lower(name)')], unique=True)
    op.create_table(
        'menu_item',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('category_id', sa.BigInteger(), sa.ForeignKey('category.id'), nullable=False),
        sa.Column('name', sa.String(length=150), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('base_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_menu_item_category_id', 'menu_item', ['category_id'])
    op.create_table(
        'item_option',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('menu_item_id', sa.BigInteger(), sa.ForeignKey('menu_item.id'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('extra_price', sa.Numeric(10, 2), nullable=False, server_default='0'),
    )
    op.create_index('ix_item_option_menu_item_id', 'item_option', ['menu_item_id'])
    op.create_table(
        'cart',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('user.id'), nullable=False, unique=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_table(
        'cart_item',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('cart_id', sa.BigInteger(), sa.ForeignKey('cart.id'), nullable=False),
        sa.Column('menu_item_id', sa.BigInteger(), nullable=False),
        sa.Column('option_ids', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('unit_price', sa.Numeric(10, 2), nullable=False),
        sa.Column('added_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_cart_item_cart_id', 'cart_item', ['cart_id'])
    op.create_table(
        'order',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('user_id', sa.BigInteger(), sa.ForeignKey('user.id'), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('promo_code', sa.String(length=50), nullable=True),
        sa.Column('subtotal', sa.Numeric(10, 2), nullable=False),
        sa.Column('tax', sa.Numeric(10, 2), nullable=False),
        sa.Column('delivery_fee', sa.Numeric(10, 2), nullable=False),
        sa.Column('total_amount', sa.Numeric(10, 2), nullable=False),
        sa.Column('order_status', sa.String(length=30), nullable=False, server_default='pending'),
        sa.Column('payment_status', sa.String(length=30), nullable=False, server_default='pending'),
        sa.Column('version', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_order_user_created', 'order', ['user_id', 'created_at'])
    op.create_index('ix_order_status', 'order', ['order_status'])
    op.create_table(
        'order_item',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id'), nullable=False),
        sa.Column('menu_item_id', sa.BigInteger(), sa.ForeignKey('menu_item.id'), nullable=False),
        sa.Column('option_ids', sa.Text(), nullable=False, server_default='[]'),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
    )
    op.create_index('ix_order_item_order_id', 'order_item', ['order_id'])
    op.create_index('ix_order_item_menu_item_id', 'order_item', ['menu_item_id'])
    op.create_table(
        'order_status_log',
        sa.Column('id', sa.BigInteger(), primary_key=True),
        sa.Column('order_id', sa.BigInteger(), sa.ForeignKey('order.id'), nullable=False),
        sa.Column('status', sa.String(length=30), nullable=False),
        sa.Column('updated_by', sa.BigInteger(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), server_default=sa.func.now()),
    )
    op.create_index('ix_order_status_log_order_id', 'order_status_log', ['order_id'])


def downgrade():
    op.drop_index('ix_order_status_log_order_id', table_name='order_status_log')
    op.drop_table('order_status_log')
    op.drop_index('ix_order_item_menu_item_id', table_name='order_item')
    op.drop_index('ix_order_item_order_id', table_name='order_item')
    op.drop_table('order_item')
    op.drop_index('ix_order_status', table_name='order')
    op.drop_index('ix_order_user_created', table_name='order')
    op.drop_table('order')
    op.drop_index('ix_cart_item_cart_id', table_name='cart_item')
    op.drop_table('cart_item')
    op.drop_table('cart')
    op.drop_index('ix_item_option_menu_item_id', table_name='item_option')
    op.drop_table('item_option')
    op.drop_index('ix_menu_item_category_id', table_name='menu_item')
    op.drop_table('menu_item')
    op.drop_index('uq_category_name_lower', table_name='category')
    op.drop_table('category')
    op.drop_index('uq_address_default_per_user', table_name='address')
    op.drop_index('ix_address_user_id', table_name='address')
    op.drop_table('address')
    op.drop_table('user')
