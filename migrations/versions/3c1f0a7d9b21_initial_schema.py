"""initial_schema

Revision ID: 3c1f0a7d9b21
Revises:
Create Date: 2026-10-18 09:12:31.204118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c1f0a7d9b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('translations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('slug', sa.String(length=50), nullable=False),
        sa.Column('language', sa.String(length=10), nullable=False),
        sa.Column('abbreviation', sa.String(length=50), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('books', sa.JSON(), nullable=False),
        sa.Column('total_books', sa.Integer(), nullable=False),
        sa.Column('total_chapters', sa.Integer(), nullable=False),
        sa.Column('total_verses', sa.Integer(), nullable=False),
        sa.Column('copyright_notice', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('language', 'abbreviation', name='unique_translation')
    )
    op.create_index(op.f('ix_translations_id'), 'translations', ['id'], unique=False)
    op.create_index(op.f('ix_translations_slug'), 'translations', ['slug'], unique=True)
    op.create_index(op.f('ix_translations_language'), 'translations', ['language'], unique=False)

    op.create_table('verses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('translation_id', sa.Integer(), nullable=False),
        sa.Column('translation_slug', sa.String(length=50), nullable=False),
        sa.Column('book_slug', sa.String(length=50), nullable=False),
        sa.Column('book_name', sa.String(length=100), nullable=False),
        sa.Column('testament', sa.String(length=10), nullable=False),
        sa.Column('chapter', sa.Integer(), nullable=False),
        sa.Column('verse', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['translation_id'], ['translations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('translation_slug', 'book_slug', 'chapter', 'verse', name='unique_verse')
    )
    op.create_index('translation_book_chapter_idx', 'verses', ['translation_slug', 'book_slug', 'chapter'], unique=False)
    op.create_index('translation_book_name_idx', 'verses', ['translation_slug', 'book_name'], unique=False)

    op.create_table('quotes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('client_ip', sa.String(length=64), nullable=False),
        sa.Column('user_name', sa.String(length=100), nullable=True),
        sa.Column('reference', sa.Text(), nullable=False),
        sa.Column('start_book', sa.String(length=50), nullable=False),
        sa.Column('end_book', sa.String(length=50), nullable=True),
        sa.Column('start_chapter', sa.Integer(), nullable=False),
        sa.Column('end_chapter', sa.Integer(), nullable=True),
        sa.Column('start_verse', sa.Integer(), nullable=False),
        sa.Column('end_verse', sa.Integer(), nullable=True),
        sa.Column('user_language', sa.String(length=10), nullable=False),
        sa.Column('user_note', sa.Text(), nullable=True),
        sa.Column('published', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_quotes_id'), 'quotes', ['id'], unique=False)
    op.create_index(op.f('ix_quotes_client_ip'), 'quotes', ['client_ip'], unique=False)
    op.create_index('published_date_idx', 'quotes', ['published', 'published_at'], unique=False)

    op.create_table('daily_verse_pool',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('start_book', sa.String(length=50), nullable=False),
        sa.Column('start_chapter', sa.Integer(), nullable=False),
        sa.Column('start_verse', sa.Integer(), nullable=False),
        sa.Column('end_book', sa.String(length=50), nullable=False),
        sa.Column('end_chapter', sa.Integer(), nullable=False),
        sa.Column('end_verse', sa.Integer(), nullable=False),
        sa.Column('publish_date', sa.String(length=5), nullable=True),
        sa.Column('last_scheduled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('schedule_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_daily_verse_pool_id'), 'daily_verse_pool', ['id'], unique=False)
    op.create_index(op.f('ix_daily_verse_pool_publish_date'), 'daily_verse_pool', ['publish_date'], unique=False)

    op.create_table('daily_verse_scheduled',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('pool_entry_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.ForeignKeyConstraint(['pool_entry_id'], ['daily_verse_pool.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_daily_verse_scheduled_id'), 'daily_verse_scheduled', ['id'], unique=False)
    op.create_index(op.f('ix_daily_verse_scheduled_date'), 'daily_verse_scheduled', ['date'], unique=True)
    op.create_index(op.f('ix_daily_verse_scheduled_pool_entry_id'), 'daily_verse_scheduled', ['pool_entry_id'], unique=False)

    op.create_table('daily_verse_batches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('month', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('year', 'month', name='unique_schedule_batch')
    )


def downgrade() -> None:
    op.drop_table('daily_verse_batches')
    op.drop_index(op.f('ix_daily_verse_scheduled_pool_entry_id'), table_name='daily_verse_scheduled')
    op.drop_index(op.f('ix_daily_verse_scheduled_date'), table_name='daily_verse_scheduled')
    op.drop_index(op.f('ix_daily_verse_scheduled_id'), table_name='daily_verse_scheduled')
    op.drop_table('daily_verse_scheduled')
    op.drop_index(op.f('ix_daily_verse_pool_publish_date'), table_name='daily_verse_pool')
    op.drop_index(op.f('ix_daily_verse_pool_id'), table_name='daily_verse_pool')
    op.drop_table('daily_verse_pool')
    op.drop_index('published_date_idx', table_name='quotes')
    op.drop_index(op.f('ix_quotes_client_ip'), table_name='quotes')
    op.drop_index(op.f('ix_quotes_id'), table_name='quotes')
    op.drop_table('quotes')
    op.drop_index('translation_book_name_idx', table_name='verses')
    op.drop_index('translation_book_chapter_idx', table_name='verses')
    op.drop_table('verses')
    op.drop_index(op.f('ix_translations_language'), table_name='translations')
    op.drop_index(op.f('ix_translations_slug'), table_name='translations')
    op.drop_index(op.f('ix_translations_id'), table_name='translations')
    op.drop_table('translations')
