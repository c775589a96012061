"""create user, game, game_player and throw tables

Revision ID: 3b7e1c9a2f40
Revises:
Create Date: 2025-09-02 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7e1c9a2f40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_user_name', 'user', ['name'], unique=True)

    op.create_table(
        'game',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('total_points', sa.Integer(), nullable=False),
        sa.Column('best_of_sets', sa.Integer(), nullable=False),
        sa.Column('double_out', sa.Boolean(), nullable=False),
        sa.Column('winner_id', sa.Integer(), nullable=True),
        sa.Column('current_player_index', sa.Integer(), nullable=False),
        sa.Column('current_throw_number', sa.Integer(), nullable=False),
        sa.Column('current_turn_points', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['winner_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_game_status', 'game', ['status'])
    op.create_index('ix_game_winner_id', 'game', ['winner_id'])

    op.create_table(
        'game_player',
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('player_order', sa.Integer(), nullable=False),
        sa.Column('sets_won', sa.Integer(), nullable=False),
        sa.Column('current_points', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('game_id', 'user_id'),
    )
    op.create_index('ix_game_player_user_id', 'game_player', ['user_id'])

    op.create_table(
        'throw',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('game_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('multiplier', sa.Integer(), nullable=False),
        sa.Column('score_after', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['game_id'], ['game.id']),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_throw_game_id', 'throw', ['game_id'])
    op.create_index('ix_throw_user_id', 'throw', ['user_id'])
    op.create_index('ix_throw_created_at', 'throw', ['created_at'])


def downgrade():
    op.drop_index('ix_throw_created_at', table_name='throw')
    op.drop_index('ix_throw_user_id', table_name='throw')
    op.drop_index('ix_throw_game_id', table_name='throw')
    op.drop_table('throw')
    op.drop_index('ix_game_player_user_id', table_name='game_player')
    op.drop_table('game_player')
    op.drop_index('ix_game_winner_id', table_name='game')
    op.drop_index('ix_game_status', table_name='game')
    op.drop_table('game')
    op.drop_index('ix_user_name', table_name='user')
    op.drop_table('user')
