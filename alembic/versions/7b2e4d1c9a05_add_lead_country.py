"""Add detected country to leads

Revision ID: 7b2e4d1c9a05
Revises: 3f1a9c2d7e40
Create Date: 2025-01-20 14:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7b2e4d1c9a05'
down_revision: Union[str, Sequence[str], None] = '3f1a9c2d7e40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.add_column('leads', sa.Column('country', sa.Text(), nullable=True))
    op.create_index('ix_leads_country', 'leads', ['country'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_leads_country', table_name='leads')
    op.drop_column('leads', 'country')
