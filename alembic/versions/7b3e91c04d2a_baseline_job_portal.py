"""baseline_job_portal

Revision ID: 7b3e91c04d2a
Revises: 
Create Date: 2026-10-19 10:12:41.118204

Production-safe migration: Only creates tables that do not exist yet.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '7b3e91c04d2a'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def table_exists(table_name: str) -> bool:
    """Check if a table exists in the database."""
    bind = op.get_bind()
    inspector = inspect(bind)
    return table_name in inspector.get_table_names()


def timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=False),
    ]


def upgrade() -> None:
    if not table_exists('users'):
        op.create_table('users',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('password_hash', sa.String(), nullable=False),
            sa.Column('role', sa.String(), nullable=False),
            sa.Column('company_name', sa.String(), nullable=True),
            sa.Column('is_active', sa.Boolean(), nullable=False),
            *timestamps(),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
        op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)

    if not table_exists('companies'):
        op.create_table('companies',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('logo', sa.String(), nullable=True),
            sa.Column('website', sa.String(), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('industry', sa.String(), nullable=True),
            sa.Column('size', sa.String(), nullable=True),
            sa.Column('founded_year', sa.Integer(), nullable=True),
            sa.Column('status', sa.String(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_companies_id'), 'companies', ['id'], unique=False)
        op.create_index(op.f('ix_companies_user_id'), 'companies', ['user_id'], unique=True)
        op.create_index(op.f('ix_companies_status'), 'companies', ['status'], unique=False)

    if not table_exists('jobs'):
        op.create_table('jobs',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('company_id', sa.Integer(), nullable=False),
            sa.Column('company_name', sa.String(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('job_type', sa.String(), nullable=False),
            sa.Column('location', sa.String(), nullable=True),
            sa.Column('salary', sa.String(), nullable=True),
            sa.Column('description', sa.Text(), nullable=True),
            sa.Column('responsibilities', sa.JSON(), nullable=False),
            sa.Column('requirements', sa.JSON(), nullable=False),
            sa.Column('apply_method', sa.JSON(), nullable=True),
            sa.Column('application_deadline', sa.DateTime(timezone=True), nullable=True),
            sa.Column('status', sa.String(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['company_id'], ['companies.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_company_status', 'jobs', ['company_id', 'status'], unique=False)
        op.create_index(op.f('ix_jobs_id'), 'jobs', ['id'], unique=False)
        op.create_index(op.f('ix_jobs_company_id'), 'jobs', ['company_id'], unique=False)
        op.create_index(op.f('ix_jobs_title'), 'jobs', ['title'], unique=False)
        op.create_index(op.f('ix_jobs_status'), 'jobs', ['status'], unique=False)
        op.create_index(op.f('ix_jobs_created_at'), 'jobs', ['created_at'], unique=False)

    if not table_exists('profiles'):
        op.create_table('profiles',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('resume', sa.String(), nullable=True),
            sa.Column('skills', sa.JSON(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_profiles_id'), 'profiles', ['id'], unique=False)
        op.create_index(op.f('ix_profiles_user_id'), 'profiles', ['user_id'], unique=True)

    if not table_exists('applications'):
        op.create_table('applications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('job_id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('name', sa.String(), nullable=False),
            sa.Column('email', sa.String(), nullable=False),
            sa.Column('resume', sa.String(), nullable=True),
            sa.Column('cv', sa.String(), nullable=True),
            sa.Column('cover_letter', sa.Text(), nullable=True),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.Column('notification_read', sa.Boolean(), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['job_id'], ['jobs.id'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id'),
            sa.UniqueConstraint('job_id', 'user_id', name='uq_application_job_user')
        )
        op.create_index(op.f('ix_applications_id'), 'applications', ['id'], unique=False)
        op.create_index(op.f('ix_applications_job_id'), 'applications', ['job_id'], unique=False)
        op.create_index(op.f('ix_applications_user_id'), 'applications', ['user_id'], unique=False)
        op.create_index(op.f('ix_applications_status'), 'applications', ['status'], unique=False)
        op.create_index(op.f('ix_applications_created_at'), 'applications', ['created_at'], unique=False)

    if not table_exists('application_status_history'):
        op.create_table('application_status_history',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('application_id', sa.Integer(), nullable=False),
            sa.Column('status', sa.String(), nullable=False),
            sa.Column('date', sa.DateTime(timezone=True), nullable=False),
            sa.Column('notes', sa.Text(), nullable=True),
            sa.ForeignKeyConstraint(['application_id'], ['applications.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_application_status_history_id'), 'application_status_history', ['id'], unique=False)
        op.create_index(op.f('ix_application_status_history_application_id'), 'application_status_history', ['application_id'], unique=False)

    if not table_exists('notifications'):
        op.create_table('notifications',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('type', sa.String(), nullable=False),
            sa.Column('title', sa.String(), nullable=False),
            sa.Column('message', sa.Text(), nullable=False),
            sa.Column('read', sa.Boolean(), nullable=False),
            sa.Column('related_id', sa.Integer(), nullable=True),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index('idx_user_read', 'notifications', ['user_id', 'read'], unique=False)
        op.create_index(op.f('ix_notifications_id'), 'notifications', ['id'], unique=False)
        op.create_index(op.f('ix_notifications_user_id'), 'notifications', ['user_id'], unique=False)
        op.create_index(op.f('ix_notifications_created_at'), 'notifications', ['created_at'], unique=False)

    if not table_exists('password_reset_tokens'):
        op.create_table('password_reset_tokens',
            sa.Column('id', sa.Integer(), nullable=False),
            sa.Column('user_id', sa.Integer(), nullable=False),
            sa.Column('token', sa.String(), nullable=False),
            sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
            *timestamps(),
            sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_password_reset_tokens_id'), 'password_reset_tokens', ['id'], unique=False)
        op.create_index(op.f('ix_password_reset_tokens_user_id'), 'password_reset_tokens', ['user_id'], unique=True)
        op.create_index(op.f('ix_password_reset_tokens_token'), 'password_reset_tokens', ['token'], unique=True)


def downgrade() -> None:
    """Drop every table, children first."""
    for table in (
        'password_reset_tokens',
        'notifications',
        'application_status_history',
        'applications',
        'profiles',
        'jobs',
        'companies',
        'users',
    ):
        if table_exists(table):
            op.drop_table(table)
