"""Create songs table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the songs table.

    group_name/title hold the "group"/"song" request fields; release_date,
    text and link are filled from the song details API.
    """
    op.create_table(
        'songs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('group_name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('title', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('release_date', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('text', sa.Text(), nullable=False, server_default=''),
        sa.Column('link', sa.String(length=1024), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP')),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_index('ix_songs_group_name', 'songs', ['group_name'])
    op.create_index('ix_songs_title', 'songs', ['title'])


def downgrade() -> None:
    """Drop the songs table."""
    op.drop_index('ix_songs_title', table_name='songs')
    op.drop_index('ix_songs_group_name', table_name='songs')
    op.drop_table('songs')
