"""create notifications and followers tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19

students, profiles, threads and comments belong to other services and must
already exist.
"""
from alembic import op
import sqlalchemy as sa

revision = '20261019_0001'
down_revision = None
branch_labels = None
depends_on = None

NOTIFICATION_TYPES = ('thread_comment', 'comment_reply', 'follow', 'mention', 'like', 'system')
REFERENCE_TYPES = ('thread', 'comment', 'resource', 'collection')


def upgrade() -> None:
    op.create_table(
        'notifications',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('recipient_id', sa.Uuid, sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('sender_id', sa.Uuid, sa.ForeignKey('students.id', ondelete='SET NULL'), nullable=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('type', sa.Enum(*NOTIFICATION_TYPES, name='notification_type_enum'), nullable=False),
        sa.Column('reference_id', sa.Uuid, nullable=True),
        sa.Column(
            'reference_type',
            sa.Enum(*REFERENCE_TYPES, name='notification_reference_type_enum'),
            nullable=True,
        ),
        sa.Column('is_read', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_notifications_recipient_id', 'notifications', ['recipient_id'])
    op.create_index('ix_notifications_type', 'notifications', ['type'])
    op.create_index('ix_notifications_reference_id', 'notifications', ['reference_id'])
    op.create_index('ix_notifications_is_read', 'notifications', ['is_read'])
    op.create_index('ix_notifications_created_at', 'notifications', ['created_at'])

    op.create_table(
        'followers',
        sa.Column('id', sa.Uuid, primary_key=True),
        sa.Column('follower_id', sa.Uuid, sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('following_id', sa.Uuid, sa.ForeignKey('students.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bell_enabled', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('follower_id', 'following_id', name='uq_followers_pair'),
        sa.CheckConstraint('follower_id <> following_id', name='ck_followers_not_self'),
    )
    op.create_index('ix_followers_follower_id', 'followers', ['follower_id'])
    op.create_index('ix_followers_following_id', 'followers', ['following_id'])


def downgrade() -> None:
    op.drop_table('followers')
    op.drop_table('notifications')
    sa.Enum(name='notification_reference_type_enum').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='notification_type_enum').drop(op.get_bind(), checkfirst=True)
