"""create html_pages table

Revision ID: 7d2f4a91c0b3
Revises:
Create Date: 2025-07-02 10:00:00.000000

This migration adds the html_pages table holding submitted page requests
and, once generated, their HTML.

The table is designed to:
1. Look pages up by numeric id (/gen/{id})
2. Keep a unique, indexed slug per page
3. Leave html NULL until the page has been generated
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '7d2f4a91c0b3'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the html_pages table."""
    op.create_table(
        'html_pages',
        # Primary key
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),

        # Secondary identifier
        sa.Column('slug', sa.String(length=255), nullable=False),

        # Timestamps
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),

        # Submission inputs
        sa.Column('prompt', sa.Text(), nullable=False),
        sa.Column('model', sa.String(length=100), nullable=False),

        # Metadata
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),

        # Generated page, NULL until first generation
        sa.Column('html', sa.Text(), nullable=True),

        sa.PrimaryKeyConstraint('id'),
    )

    op.create_index(
        'ix_html_pages_slug',
        'html_pages',
        ['slug'],
        unique=True,
    )


def downgrade() -> None:
    """Drop the html_pages table."""
    op.drop_index('ix_html_pages_slug', table_name='html_pages')
    op.drop_table('html_pages')
