"""news slots and instruments

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19 10:00:00.000000+00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'news_slot',
        sa.Column('slot_id', sa.String(length=8), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('headline', sa.Text(), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('publish_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('slot_id')
    )
    op.create_index(op.f('ix_news_slot_order'), 'news_slot', ['order'], unique=False)

    op.create_table(
        'instrument',
        sa.Column('instrument_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('sector', sa.String(length=100), nullable=True),
        sa.Column('base_price', sa.Float(), nullable=True),
        sa.Column('delta_pct', sa.Float(), nullable=True),
        sa.Column('order', sa.Integer(), nullable=True),
        sa.Column('is_published', sa.Boolean(), nullable=True),
        sa.Column('scheduled_delta', sa.Float(), nullable=True),
        sa.Column('apply_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('instrument_id')
    )
    op.create_index(op.f('ix_instrument_order'), 'instrument', ['order'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_instrument_order'), table_name='instrument')
    op.drop_table('instrument')
    op.drop_index(op.f('ix_news_slot_order'), table_name='news_slot')
    op.drop_table('news_slot')
