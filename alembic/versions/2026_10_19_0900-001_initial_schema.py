"""Initial schema: profiles, skills, member/coach links and requests

Revision ID: 001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

actor_role = sa.Enum('MEMBER', 'COACH', name='actorrole')
request_kind = sa.Enum('CONNECTION', 'SESSION', name='requestkind')
request_status = sa.Enum('PENDING', 'ACCEPTED', 'REJECTED', 'CANCELLED', name='requeststatus')
skill_level = sa.Enum('BEGINNER', 'INTERMEDIATE', 'ADVANCED', name='skilllevel')


def upgrade() -> None:
    """Create all tables."""
    op.create_table('members', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('profile_pic', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_members_email'), 'members', ['email'], unique=False)

    op.create_table('coaches', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=False),
        sa.Column('last_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=False),
        sa.Column('email', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('profile_pic', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('biography', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('location', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_coaches_email'), 'coaches', ['email'], unique=False)

    op.create_table('skills', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.PrimaryKeyConstraint('id'), sa.UniqueConstraint('title'))

    op.create_table('coach_skills', sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.Column('skill_id', sa.Integer(), nullable=False),
        sa.Column('skill_level', skill_level, nullable=False),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id'], ),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ),
        sa.PrimaryKeyConstraint('coach_id', 'skill_id'))

    op.create_table('member_coach', sa.Column('member_id', sa.Integer(), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['member_id'], ['members.id'], ),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id'], ),
        sa.PrimaryKeyConstraint('member_id', 'coach_id'))
    op.create_index(op.f('ix_member_coach_coach_id'), 'member_coach', ['coach_id'], unique=False)

    # No unique index on (sender, receiver, PENDING): the duplicate check is best-effort
    op.create_table('requests', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('kind', request_kind, nullable=False),
        sa.Column('sender_role', actor_role, nullable=False),
        sa.Column('sender_id', sa.Integer(), nullable=False),
        sa.Column('receiver_role', actor_role, nullable=False),
        sa.Column('receiver_id', sa.Integer(), nullable=False),
        sa.Column('sender_first_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=True),
        sa.Column('sender_last_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=True),
        sa.Column('sender_profile_pic', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('receiver_first_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=True),
        sa.Column('receiver_last_name', sqlmodel.sql.sqltypes.AutoString(length=30), nullable=True),
        sa.Column('receiver_profile_pic', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('status', request_status, nullable=False),
        sa.Column('message', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('session_date_1', sa.Date(), nullable=True),
        sa.Column('session_date_2', sa.Date(), nullable=True),
        sa.Column('session_date_3', sa.Date(), nullable=True),
        sa.Column('session_time_1', sa.Time(), nullable=True),
        sa.Column('session_time_2', sa.Time(), nullable=True),
        sa.Column('session_time_3', sa.Time(), nullable=True),
        sa.Column('session_location', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('session_description', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_requests_kind'), 'requests', ['kind'], unique=False)
    op.create_index(op.f('ix_requests_status'), 'requests', ['status'], unique=False)
    op.create_index('ix_requests_sender', 'requests', ['sender_role', 'sender_id'], unique=False)
    op.create_index('ix_requests_receiver', 'requests', ['receiver_role', 'receiver_id'], unique=False)


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_requests_receiver', table_name='requests')
    op.drop_index('ix_requests_sender', table_name='requests')
    op.drop_index(op.f('ix_requests_status'), table_name='requests')
    op.drop_index(op.f('ix_requests_kind'), table_name='requests')
    op.drop_table('requests')
    op.drop_index(op.f('ix_member_coach_coach_id'), table_name='member_coach')
    op.drop_table('member_coach')
    op.drop_table('coach_skills')
    op.drop_table('skills')
    op.drop_index(op.f('ix_coaches_email'), table_name='coaches')
    op.drop_table('coaches')
    op.drop_index(op.f('ix_members_email'), table_name='members')
    op.drop_table('members')

    bind = op.get_bind()
    for enum_type in (request_status, request_kind, actor_role, skill_level):
        enum_type.drop(bind, checkfirst=True)
