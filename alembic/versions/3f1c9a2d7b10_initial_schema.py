"""initial_schema

Revision ID: 3f1c9a2d7b10
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2d7b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('ADMIN', 'CLIENT', name='user_role')
challenge_difficulty = sa.Enum('EASY', 'MEDIUM', 'HARD', 'EXPERT', name='challenge_difficulty')
challenge_progress_status = sa.Enum('IN_PROGRESS', 'COMPLETED', 'ABANDONED', name='challenge_progress_status')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('hashed_password', sa.String(length=500), nullable=False),
        sa.Column('full_name', sa.String(length=255), nullable=True),
        sa.Column('role', user_role, nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_username', 'users', ['username'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_is_active', 'users', ['is_active'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'genres',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_genres_id', 'genres', ['id'])
    op.create_index('ix_genres_name', 'genres', ['name'], unique=True)

    op.create_table(
        'actors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('biography', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_actors_id', 'actors', ['id'])
    op.create_index('ix_actors_last_name', 'actors', ['last_name'])

    op.create_table(
        'series',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True, comment='Poster image'),
        sa.Column('rating', sa.Float(), nullable=False, comment='Average user rating (0-10), 2 decimals'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_series_id', 'series', ['id'])
    op.create_index('ix_series_title', 'series', ['title'])

    op.create_table(
        'series_genres',
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('genre_id', sa.Integer(), sa.ForeignKey('genres.id', ondelete='CASCADE'), primary_key=True),
    )
    op.create_table(
        'series_actors',
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('actor_id', sa.Integer(), sa.ForeignKey('actors.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'seasons',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), nullable=False),
        sa.Column('season_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('release_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_seasons_id', 'seasons', ['id'])
    op.create_index('ix_seasons_series_id', 'seasons', ['series_id'])

    op.create_table(
        'episodes',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('season_id', sa.Integer(), sa.ForeignKey('seasons.id', ondelete='CASCADE'), nullable=False),
        sa.Column('episode_number', sa.Integer(), nullable=False, comment='Episode number within the season'),
        sa.Column('title', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('air_date', sa.Date(), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_episodes_id', 'episodes', ['id'])
    op.create_index('ix_episodes_season_id', 'episodes', ['season_id'])

    op.create_table(
        'episode_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('episode_id', sa.Integer(), sa.ForeignKey('episodes.id', ondelete='CASCADE'), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('watched_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'episode_id', name='uq_episode_progress_user_episode'),
    )
    op.create_index('ix_episode_progress_id', 'episode_progress', ['id'])
    op.create_index('ix_episode_progress_user_id', 'episode_progress', ['user_id'])
    op.create_index('ix_episode_progress_episode_id', 'episode_progress', ['episode_id'])
    op.create_index('ix_episode_progress_watched_at', 'episode_progress', ['watched_at'])

    op.create_table(
        'ratings',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'series_id', name='uq_ratings_user_series'),
    )
    op.create_index('ix_ratings_id', 'ratings', ['id'])
    op.create_index('ix_ratings_user_id', 'ratings', ['user_id'])
    op.create_index('ix_ratings_series_id', 'ratings', ['series_id'])

    op.create_table(
        'watchlist_collections',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_watchlist_collections_id', 'watchlist_collections', ['id'])
    op.create_index('ix_watchlist_collections_user_id', 'watchlist_collections', ['user_id'])

    op.create_table(
        'watchlists',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('series_id', sa.Integer(), sa.ForeignKey('series.id', ondelete='CASCADE'), nullable=False),
        sa.Column(
            'collection_id',
            sa.Integer(),
            sa.ForeignKey('watchlist_collections.id', ondelete='SET NULL'),
            nullable=True,
        ),
        sa.Column('added_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_watchlists_id', 'watchlists', ['id'])
    op.create_index('ix_watchlists_user_id', 'watchlists', ['user_id'])
    op.create_index('ix_watchlists_series_id', 'watchlists', ['series_id'])
    op.create_index('ix_watchlists_collection_id', 'watchlists', ['collection_id'])

    op.create_table(
        'challenges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('difficulty', challenge_difficulty, nullable=False),
        sa.Column('target_count', sa.Integer(), nullable=False),
        sa.Column('participants_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_challenges_id', 'challenges', ['id'])

    op.create_table(
        'challenge_progress',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('challenge_id', sa.Integer(), sa.ForeignKey('challenges.id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('progress_count', sa.Integer(), nullable=False),
        sa.Column('status', challenge_progress_status, nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_challenge_progress_id', 'challenge_progress', ['id'])
    op.create_index('ix_challenge_progress_challenge_id', 'challenge_progress', ['challenge_id'])
    op.create_index('ix_challenge_progress_user_id', 'challenge_progress', ['user_id'])


def downgrade():
    op.drop_table('challenge_progress')
    op.drop_table('challenges')
    op.drop_table('watchlists')
    op.drop_table('watchlist_collections')
    op.drop_table('ratings')
    op.drop_table('episode_progress')
    op.drop_table('episodes')
    op.drop_table('seasons')
    op.drop_table('series_actors')
    op.drop_table('series_genres')
    op.drop_table('series')
    op.drop_table('actors')
    op.drop_table('genres')
    op.drop_table('users')

    bind = op.get_bind()
    challenge_progress_status.drop(bind, checkfirst=True)
    challenge_difficulty.drop(bind, checkfirst=True)
    user_role.drop(bind, checkfirst=True)
