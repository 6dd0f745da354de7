"""Create members and reward claims tables

Revision ID: 20261019_000001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Members (recruiter_id is the referral edge)
    op.create_table(
        'members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('referral_code', sa.String(length=20), nullable=False),
        sa.Column('recruiter_id', sa.Integer(), nullable=True),
        sa.Column(
            'is_club_member', sa.Boolean(),
            nullable=False, server_default=sa.false()
        ),
        sa.Column(
            'is_admin', sa.Boolean(),
            nullable=False, server_default=sa.false()
        ),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            'recruiter_id IS NULL OR recruiter_id <> id',
            name='check_member_not_own_recruiter'
        ),
        sa.ForeignKeyConstraint(
            ['recruiter_id'], ['members.id'], ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(
        'ix_members_full_name', 'members', ['full_name'], unique=False
    )
    op.create_index('ix_members_email', 'members', ['email'], unique=True)
    op.create_index(
        'ix_members_referral_code', 'members',
        ['referral_code'], unique=True
    )
    op.create_index(
        'ix_members_recruiter_id', 'members', ['recruiter_id'], unique=False
    )
    op.create_index(
        'ix_members_is_club_member', 'members',
        ['is_club_member'], unique=False
    )

    # Reward claims
    op.create_table(
        'reward_claims',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('level', sa.Integer(), nullable=False),
        sa.Column('amount', sa.String(length=100), nullable=False),
        sa.Column(
            'status', sa.String(length=20),
            nullable=False, server_default='PENDING'
        ),
        sa.Column('note', sa.Text(), nullable=True),
        sa.Column('claimed_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('processed_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['member_id'], ['members.id'], ondelete='CASCADE'
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint(
            'member_id', 'level', name='uq_reward_claims_member_level'
        )
    )
    op.create_index(
        'ix_reward_claims_member_id', 'reward_claims',
        ['member_id'], unique=False
    )
    op.create_index(
        'ix_reward_claims_status', 'reward_claims', ['status'], unique=False
    )


def downgrade() -> None:
    op.drop_index('ix_reward_claims_status', table_name='reward_claims')
    op.drop_index('ix_reward_claims_member_id', table_name='reward_claims')
    op.drop_table('reward_claims')
    op.drop_index('ix_members_is_club_member', table_name='members')
    op.drop_index('ix_members_recruiter_id', table_name='members')
    op.drop_index('ix_members_referral_code', table_name='members')
    op.drop_index('ix_members_email', table_name='members')
    op.drop_index('ix_members_full_name', table_name='members')
    op.drop_table('members')
