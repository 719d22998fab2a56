"""Create leads table with derived score columns

Revision ID: 3f1a9c2d7e40
Revises:
Create Date: 2025-01-06 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1a9c2d7e40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('leads',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('prospect_name', sa.Text(), nullable=True),
        sa.Column('prospect_email', sa.Text(), nullable=True),
        sa.Column('phone', sa.Text(), nullable=True),
        sa.Column('intake', sa.Text(), nullable=True),
        sa.Column('source', sa.Text(), nullable=True),
        sa.Column('contact_status', sa.Text(), nullable=True),
        sa.Column('is_priority', sa.Boolean(), nullable=True),
        sa.Column('created_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('name_score', sa.Integer(), nullable=True),
        sa.Column('lead_score', sa.Integer(), nullable=True),
        sa.Column('lead_quality', sa.Text(), nullable=True),
        sa.Column('scored_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leads_contact_status', 'leads', ['contact_status'])
    op.create_index('ix_leads_lead_quality', 'leads', ['lead_quality'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_leads_lead_quality', table_name='leads')
    op.drop_index('ix_leads_contact_status', table_name='leads')
    op.drop_table('leads')
