"""News Aggregator Schema

Revision ID: 001_news_aggregator
Revises:
Create Date: 2026-10-19

Sources, categories, authors, articles and user preferences. The unique
constraints on categories.slug, authors(name, source_id) and
articles.url_hash are the ON CONFLICT targets used by ingestion.
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_news_aggregator'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'sources',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('api_identifier', sa.String(64), unique=True, nullable=False),
        sa.Column('website_url', sa.String(512), nullable=True),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('is_active', sa.Boolean, server_default=sa.true(), nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )

    op.create_table(
        'categories',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), unique=True, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )

    op.create_table(
        'authors',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('source_id', sa.Integer, sa.ForeignKey('sources.id', ondelete='CASCADE'), nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=True),
        sa.UniqueConstraint('name', 'source_id', name='uq_authors_name_source'),
    )

    op.create_table(
        'articles',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('source_id', sa.Integer, sa.ForeignKey('sources.id', ondelete='CASCADE'), nullable=False),
        sa.Column('category_id', sa.Integer, sa.ForeignKey('categories.id', ondelete='SET NULL'), nullable=True),
        sa.Column('author_id', sa.Integer, sa.ForeignKey('authors.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(500), nullable=False),
        sa.Column('description', sa.Text, nullable=True),
        sa.Column('content', sa.Text, nullable=True),
        sa.Column('url', sa.Text, nullable=False),
        sa.Column('url_hash', sa.String(64), unique=True, nullable=False),
        sa.Column('image_url', sa.String(1000), nullable=True),
        sa.Column('published_at', sa.DateTime, nullable=True),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )
    op.create_index('ix_articles_published_at', 'articles', ['published_at'])
    op.create_index('ix_articles_source_id', 'articles', ['source_id'])
    op.create_index('ix_articles_category_id', 'articles', ['category_id'])

    op.create_table(
        'user_preferences',
        sa.Column('id', sa.Integer, primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.Integer, unique=True, nullable=False),
        sa.Column('preferred_sources', sa.JSON, nullable=False),
        sa.Column('preferred_categories', sa.JSON, nullable=False),
        sa.Column('preferred_authors', sa.JSON, nullable=False),
        sa.Column('created_at', sa.DateTime, nullable=False),
        sa.Column('updated_at', sa.DateTime, nullable=True),
    )


def downgrade() -> None:
    op.drop_table('user_preferences')
    op.drop_index('ix_articles_category_id', table_name='articles')
    op.drop_index('ix_articles_source_id', table_name='articles')
    op.drop_index('ix_articles_published_at', table_name='articles')
    op.drop_table('articles')
    op.drop_table('authors')
    op.drop_table('categories')
    op.drop_table('sources')
