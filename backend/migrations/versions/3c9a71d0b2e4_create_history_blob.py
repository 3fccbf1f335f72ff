"""create history_blob table for stored match history

Revision ID: 3c9a71d0b2e4
Revises:
Create Date: 2025-11-16 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c9a71d0b2e4'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    if 'history_blob' in set(insp.get_table_names()):
        return
    op.create_table(
        'history_blob',
        sa.Column('key', sa.String(length=64), primary_key=True),
        sa.Column('payload', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.Float(), nullable=True),
    )


def downgrade():
    op.drop_table('history_blob')
