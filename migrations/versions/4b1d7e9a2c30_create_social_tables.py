"""create_social_tables

Revision ID: 4b1d7e9a2c30
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4b1d7e9a2c30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create profiles, follows, likes and notifications tables."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('bio', sa.Text(), nullable=False),
        sa.Column('headline', sa.String(length=200), nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('interests', postgresql.JSONB(), server_default='[]', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )
    op.create_index('idx_profiles_created_at', 'profiles', ['created_at'], unique=False)
    # Containment queries on interests (interests @> '["tag"]')
    op.create_index(
        'idx_profiles_interests',
        'profiles',
        ['interests'],
        unique=False,
        postgresql_using='gin',
    )

    op.create_table('follows',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('follower_id', sa.String(length=255), nullable=False),
        sa.Column('following_id', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('follower_id <> following_id', name='ck_follows_not_self'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('follower_id', 'following_id', name='uq_follows_pair'),
    )
    op.create_index('ix_follows_follower_id', 'follows', ['follower_id'], unique=False)
    op.create_index('ix_follows_following_id', 'follows', ['following_id'], unique=False)

    op.create_table('likes',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('profile_id', sa.UUID(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'profile_id', name='uq_likes_pair'),
    )
    op.create_index('ix_likes_profile_id', 'likes', ['profile_id'], unique=False)

    op.create_table('notifications',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('actor_user_id', sa.String(length=255), nullable=False),
        sa.Column('actor_name', sa.String(length=255), nullable=False),
        sa.Column('actor_avatar_url', sa.String(length=500), nullable=True),
        sa.Column('profile_id', sa.UUID(), nullable=True),
        sa.Column('profile_name', sa.String(length=100), nullable=True),
        sa.Column('read', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("type IN ('follow', 'like')", name='ck_notifications_type'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'idx_notifications_user_created',
        'notifications',
        ['user_id', 'created_at'],
        unique=False,
    )
    op.create_index(
        'ix_notifications_actor_user_id', 'notifications', ['actor_user_id'], unique=False
    )


def downgrade() -> None:
    """Drop the social tables."""
    op.drop_index('ix_notifications_actor_user_id', table_name='notifications')
    op.drop_index('idx_notifications_user_created', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_likes_profile_id', table_name='likes')
    op.drop_table('likes')
    op.drop_index('ix_follows_following_id', table_name='follows')
    op.drop_index('ix_follows_follower_id', table_name='follows')
    op.drop_table('follows')
    op.drop_index('idx_profiles_interests', table_name='profiles')
    op.drop_index('idx_profiles_created_at', table_name='profiles')
    op.drop_table('profiles')
