"""create user, user_transaction and score tables

Revision ID: 3c9a7e1f5b20
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c9a7e1f5b20'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=True),
        sa.Column('avatar', sa.String(length=512), nullable=True),
        sa.Column('birthday', sa.String(length=32), nullable=True),
        sa.Column('money', sa.Integer(), nullable=True),
        sa.Column('card_effect', sa.String(length=64), nullable=True),
        sa.Column('card_decoration', sa.String(length=64), nullable=True),
        sa.Column('is_master', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('achievements', sa.JSON(), nullable=False),
        sa.Column('unlocked_effects', sa.JSON(), nullable=False),
        sa.Column('unlocked_titles', sa.JSON(), nullable=False),
        sa.Column('stats', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('seq'),
    )
    op.create_index(op.f('ix_user_id'), 'user', ['id'], unique=True)
    op.create_index(op.f('ix_user_name'), 'user', ['name'], unique=True)

    op.create_table(
        'user_transaction',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('description', sa.String(length=256), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('timestamp', sa.String(length=40), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_transaction_user_id'), 'user_transaction', ['user_id'], unique=False)

    op.create_table(
        'score',
        sa.Column('seq', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('game_id', sa.String(length=64), nullable=False),
        sa.Column('score', sa.JSON(), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('options', sa.JSON(), nullable=False),
        sa.Column('timestamp', sa.String(length=40), nullable=False),
        sa.PrimaryKeyConstraint('seq'),
    )
    op.create_index(op.f('ix_score_id'), 'score', ['id'], unique=True)
    op.create_index(op.f('ix_score_game_id'), 'score', ['game_id'], unique=False)
    op.create_index(op.f('ix_score_user_id'), 'score', ['user_id'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_score_user_id'), table_name='score')
    op.drop_index(op.f('ix_score_game_id'), table_name='score')
    op.drop_index(op.f('ix_score_id'), table_name='score')
    op.drop_table('score')
    op.drop_index(op.f('ix_user_transaction_user_id'), table_name='user_transaction')
    op.drop_table('user_transaction')
    op.drop_index(op.f('ix_user_name'), table_name='user')
    op.drop_index(op.f('ix_user_id'), table_name='user')
    op.drop_table('user')
