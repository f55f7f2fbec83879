"""create account, game_state, enrollment and payout tables

Revision ID: 5c2e9a7d1b40
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5c2e9a7d1b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'account',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.String(length=64), nullable=False),
        sa.Column('password_hash', sa.String(length=256), nullable=False),
        sa.Column('winnings', sa.String(length=80), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('account') as batch_op:
        batch_op.create_index(batch_op.f('ix_account_account_id'), ['account_id'], unique=True)

    op.create_table(
        'game_state',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('owner', sa.String(length=64), nullable=False),
        sa.Column('winner', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('last_played', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('status', sa.String(length=32), nullable=False, server_default='active'),
        sa.Column('pot', sa.String(length=80), nullable=False),
        sa.Column('fee_strategy', sa.String(length=32), nullable=False, server_default='quadratic'),
        sa.Column('lottery_chance', sa.Float(), nullable=False, server_default='0.2'),
        sa.Column('epoch', sa.Integer(), nullable=False, server_default='1'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'enrollment',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('account_id', sa.String(length=64), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game_state.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('game_id', 'account_id', name='uq_enrollment_game_account'),
    )

    op.create_table(
        'payout',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('recipient', sa.String(length=64), nullable=False),
        sa.Column('epoch', sa.Integer(), nullable=False),
        sa.Column('amount', sa.String(length=80), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False, server_default='pending'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('settled_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['game_id'], ['game_state.id']),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade():
    op.drop_table('payout')
    op.drop_table('enrollment')
    op.drop_table('game_state')
    with op.batch_alter_table('account') as batch_op:
        batch_op.drop_index(batch_op.f('ix_account_account_id'))
    op.drop_table('account')
