"""Initial schema: Create users, filter_options and posts tables

Revision ID: 001_initial_schema
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


FILTER_TYPES = ('qualification', 'category', 'sector', 'subSector', 'branch', 'role')
POST_TYPES = ('job', 'skill', 'course')


def upgrade() -> None:
    # 1. users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=320), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('fullname', sa.String(length=255), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_external_id', 'users', ['external_id'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2. filter_options (self-referencing taxonomy tree)
    op.create_table(
        'filter_options',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.Enum(*FILTER_TYPES, name='filter_type'), nullable=False),
        sa.Column('parent_id', sa.Integer(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('avg_salary', sa.String(length=255), nullable=True),
        sa.Column('relevant_exams', sa.Text(), nullable=True),
        sa.Column('image', sa.String(length=1024), nullable=True),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('comments', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['parent_id'], ['filter_options.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('parent_id', 'name', name='uq_filter_options_parent_name'),
    )
    op.create_index('idx_filter_options_parent_id', 'filter_options', ['parent_id'])
    op.create_index('idx_filter_options_is_active', 'filter_options', ['is_active'])

    # 3. posts
    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('post_type', sa.Enum(*POST_TYPES, name='post_type'), nullable=False),
        sa.Column('filter_option_ids', sa.JSON(), nullable=False),
        sa.Column('source_url', sa.String(length=1024), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('location', sa.JSON(), nullable=True),
        sa.Column('experience', sa.String(length=100), nullable=True),
        sa.Column('salary', sa.String(length=100), nullable=True),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('comments', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_by', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_posts_is_active', 'posts', ['is_active'])


def downgrade() -> None:
    op.drop_index('ix_posts_is_active', table_name='posts')
    op.drop_table('posts')
    op.drop_index('idx_filter_options_is_active', table_name='filter_options')
    op.drop_index('idx_filter_options_parent_id', table_name='filter_options')
    op.drop_table('filter_options')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_external_id', table_name='users')
    op.drop_table('users')
    sa.Enum(name='post_type').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='filter_type').drop(op.get_bind(), checkfirst=True)
