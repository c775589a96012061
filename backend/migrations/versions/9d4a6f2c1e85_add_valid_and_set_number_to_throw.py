"""add valid and set_number to throw

Revision ID: 9d4a6f2c1e85
Revises: 3b7e1c9a2f40
Create Date: 2025-09-14 18:30:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '9d4a6f2c1e85'
down_revision = '3b7e1c9a2f40'
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    cols = {c['name'] for c in insp.get_columns('throw')}
    with op.batch_alter_table('throw') as batch_op:
        # Existing rows predate bust tracking; treat them as scored darts.
        if 'valid' not in cols:
            batch_op.add_column(sa.Column('valid', sa.Boolean(), nullable=False, server_default=sa.true()))
        # Left NULL on old rows; statistics fall back to inferring set boundaries.
        if 'set_number' not in cols:
            batch_op.add_column(sa.Column('set_number', sa.Integer(), nullable=True))


def downgrade():
    with op.batch_alter_table('throw') as batch_op:
        batch_op.drop_column('set_number')
        batch_op.drop_column('valid')
