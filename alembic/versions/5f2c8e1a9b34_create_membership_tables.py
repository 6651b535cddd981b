"""create organizations, users, memberships and membership_requests

Revision ID: 5f2c8e1a9b34
Revises:
Create Date: 2026-10-18 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '5f2c8e1a9b34'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'organizations',
        sa.Column('id', sa.String(length=255), primary_key=True, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('last_name', sa.String(length=100), nullable=False, server_default=''),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.UniqueConstraint('email', name='ux_users_email'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=False)
    op.create_table(
        'memberships',
        sa.Column('organization_id', sa.String(length=255), primary_key=True, nullable=False),
        sa.Column('user_id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('role', sa.String(length=6), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )
    op.create_table(
        'membership_requests',
        sa.Column('id', sa.Uuid(), primary_key=True, nullable=False),
        sa.Column('organization_id', sa.String(length=255), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('resolved_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index(
        'ux_membership_requests_pending',
        'membership_requests',
        ['organization_id', 'user_id'],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
        sqlite_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        'ix_membership_requests_org_status',
        'membership_requests',
        ['organization_id', 'status', 'created_at'],
        unique=False,
    )
    op.create_index(
        'ix_membership_requests_user_id', 'membership_requests', ['user_id'], unique=False
    )


def downgrade() -> None:
    op.drop_index('ix_membership_requests_user_id', table_name='membership_requests')
    op.drop_index('ix_membership_requests_org_status', table_name='membership_requests')
    op.drop_index('ux_membership_requests_pending', table_name='membership_requests')
    op.drop_table('membership_requests')
    op.drop_table('memberships')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.drop_table('organizations')
