"""Create song catalog, per-session rating state, and vote log tables

Revision ID: 5b1e0c7a9d21
Revises:
Create Date: 2026-10-19 12:00:00.000000+00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# Revision identifiers, used by Alembic.
revision: str = "5b1e0c7a9d21"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "songs",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("artist", sa.String(length=255), nullable=False),
        sa.Column("genre", sa.String(length=50), nullable=True),
        sa.Column("youtube_id", sa.String(length=20), nullable=False),
        sa.Column("start_time", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rating", sa.Integer(), nullable=False, server_default="1500"),
        sa.Column("previous_rating", sa.Integer(), nullable=False, server_default="1500"),
        sa.Column("comparisons", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_songs_rating", "songs", ["rating"])

    op.create_table(
        "personal_ratings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("song_id", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comparisons", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("wins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["song_id"], ["songs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_id", "song_id", name="uq_personal_rating_session_song"),
    )
    op.create_index("idx_personal_ratings_session", "personal_ratings", ["session_id"])

    op.create_table(
        "recent_pairs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("winner_id", sa.Integer(), nullable=False),
        sa.Column("loser_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["winner_id"], ["songs.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["loser_id"], ["songs.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_recent_pairs_session", "recent_pairs", ["session_id", "id"])

    op.create_table(
        "genre_affinities",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("genre", sa.String(length=50), nullable=False),
        sa.Column("wins", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("comparisons", sa.Integer(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("session_id", "genre", name="uq_genre_affinity_session_genre"),
    )

    op.create_table(
        "votes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("session_id", sa.String(length=64), nullable=False),
        sa.Column("winner_id", sa.Integer(), nullable=False),
        sa.Column("loser_id", sa.Integer(), nullable=False),
        sa.Column("voted_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["winner_id"], ["songs.id"]),
        sa.ForeignKeyConstraint(["loser_id"], ["songs.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_votes_voted_at", "votes", ["voted_at"])


def downgrade() -> None:
    op.drop_index("idx_votes_voted_at", table_name="votes")
    op.drop_table("votes")

    op.drop_table("genre_affinities")

    op.drop_index("idx_recent_pairs_session", table_name="recent_pairs")
    op.drop_table("recent_pairs")

    op.drop_index("idx_personal_ratings_session", table_name="personal_ratings")
    op.drop_table("personal_ratings")

    op.drop_index("idx_songs_rating", table_name="songs")
    op.drop_table("songs")
