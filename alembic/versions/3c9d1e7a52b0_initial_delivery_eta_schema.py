"""Initial delivery ETA schema

Revision ID: 3c9d1e7a52b0
Revises: 
Create Date: 2025-03-03 10:12:44.180231

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3c9d1e7a52b0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # templates first: stores point at their active template
    op.create_table('message_templates',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('store_id', sa.Integer(), nullable=True),
    sa.Column('template_key', sa.String(length=64), nullable=True),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('message', sa.Text(), nullable=False),
    sa.Column('tone_default', sa.String(length=16), nullable=False),
    sa.Column('is_built_in', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )

    op.create_table('stores',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('shop', sa.String(length=255), nullable=False),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('app_enabled', sa.Boolean(), nullable=False),
    sa.Column('active_template_id', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['active_template_id'], ['message_templates.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_stores_id'), 'stores', ['id'], unique=False)
    op.create_index(op.f('ix_stores_shop'), 'stores', ['shop'], unique=True)

    op.create_table('store_settings',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('store_id', sa.Integer(), nullable=False),
    sa.Column('show_on_product_page', sa.Boolean(), nullable=False),
    sa.Column('cart_enabled', sa.Boolean(), nullable=False),
    sa.Column('checkout_enabled', sa.Boolean(), nullable=False),
    sa.Column('aggregation', sa.String(length=16), nullable=False),
    sa.Column('date_format', sa.String(length=16), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('store_id')
    )

    op.create_table('delivery_rules',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('store_id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('countries', sa.Text(), nullable=False),
    sa.Column('regions', sa.Text(), nullable=True),
    sa.Column('postal_codes', sa.Text(), nullable=True),
    sa.Column('carrier', sa.String(length=255), nullable=True),
    sa.Column('shipping_method', sa.String(length=255), nullable=True),
    sa.Column('cutoff_time', sa.String(length=5), nullable=True),
    sa.Column('timezone', sa.String(length=64), nullable=True),
    sa.Column('min_days', sa.Integer(), nullable=False),
    sa.Column('max_days', sa.Integer(), nullable=False),
    sa.Column('processing_days', sa.Integer(), nullable=False),
    sa.Column('exclude_weekends', sa.Boolean(), nullable=False),
    sa.Column('exclude_holidays', sa.Boolean(), nullable=False),
    sa.Column('message_template', sa.Text(), nullable=True),
    sa.Column('display', sa.JSON(), nullable=True),
    sa.Column('priority', sa.Integer(), nullable=False),
    sa.Column('is_active', sa.Boolean(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_delivery_rules_id'), 'delivery_rules', ['id'], unique=False)
    op.create_index(op.f('ix_delivery_rules_store_id'), 'delivery_rules', ['store_id'], unique=False)

    op.create_table('holidays',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('store_id', sa.Integer(), nullable=False),
    sa.Column('name', sa.String(length=255), nullable=False),
    sa.Column('date', sa.Date(), nullable=False),
    sa.Column('is_recurring', sa.Boolean(), nullable=False),
    sa.Column('country_code', sa.String(length=2), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_holidays_store_id'), 'holidays', ['store_id'], unique=False)

    op.create_table('product_targeting',
    sa.Column('id', sa.Integer(), nullable=False),
    sa.Column('store_id', sa.Integer(), nullable=False),
    sa.Column('rule_id', sa.Integer(), nullable=False),
    sa.Column('product_id', sa.String(length=64), nullable=False),
    sa.Column('variant_id', sa.String(length=64), nullable=True),
    sa.Column('override_min_days', sa.Integer(), nullable=True),
    sa.Column('override_max_days', sa.Integer(), nullable=True),
    sa.Column('override_processing_days', sa.Integer(), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['rule_id'], ['delivery_rules.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['store_id'], ['stores.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('rule_id', 'product_id', 'variant_id', name='uq_product_targeting_rule_product_variant')
    )
    op.create_index(op.f('ix_product_targeting_product_id'), 'product_targeting', ['product_id'], unique=False)
    op.create_index(op.f('ix_product_targeting_store_id'), 'product_targeting', ['store_id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_product_targeting_store_id'), table_name='product_targeting')
    op.drop_index(op.f('ix_product_targeting_product_id'), table_name='product_targeting')
    op.drop_table('product_targeting')
    op.drop_index(op.f('ix_holidays_store_id'), table_name='holidays')
    op.drop_table('holidays')
    op.drop_index(op.f('ix_delivery_rules_store_id'), table_name='delivery_rules')
    op.drop_index(op.f('ix_delivery_rules_id'), table_name='delivery_rules')
    op.drop_table('delivery_rules')
    op.drop_table('store_settings')
    op.drop_index(op.f('ix_stores_shop'), table_name='stores')
    op.drop_index(op.f('ix_stores_id'), table_name='stores')
    op.drop_table('stores')
    op.drop_table('message_templates')
