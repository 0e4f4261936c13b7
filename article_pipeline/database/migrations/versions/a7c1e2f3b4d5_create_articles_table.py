"""Create articles table.

Revision ID: a7c1e2f3b4d5
Revises:
Create Date: 2025-01-20 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a7c1e2f3b4d5'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'articles',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('url', sa.Text(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('original_content', sa.Text(), nullable=False),
        sa.Column('published_date', sa.String(length=32), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('research_state', sa.String(length=20), nullable=True),
        sa.Column('research_candidates', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('user_tone', sa.String(length=100), nullable=True),
        sa.Column('user_keywords', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('custom_prompt', sa.Text(), nullable=True),
        sa.Column('target_language', sa.String(length=50), nullable=True),
        sa.Column('readability_level', sa.Integer(), nullable=True),
        sa.Column('ai_summary', sa.Text(), nullable=True),
        sa.Column('ai_tags', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('updated_content', sa.Text(), nullable=True),
        sa.Column('citations', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('seo_score', sa.Integer(), nullable=True),
        sa.Column('seo_analysis', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('version_history', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('url'),
        sa.CheckConstraint(
            'readability_level IS NULL OR (readability_level >= 0 AND readability_level <= 100)',
            name='ck_articles_readability_level_range',
        ),
    )
    op.create_index('ix_articles_status', 'articles', ['status'], unique=False)
    op.create_index('ix_articles_created_at', 'articles', ['created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_articles_created_at', table_name='articles')
    op.drop_index('ix_articles_status', table_name='articles')
    op.drop_table('articles')
