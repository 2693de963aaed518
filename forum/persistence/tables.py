"""SQLAlchemy table definitions for the forum.

These table definitions are used with SQLAlchemy Core; rows are mapped to
the pydantic domain models by hand in ``mappers``. They match the schema
created by the Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    SmallInteger,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import ARRAY, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column(
        "role",
        postgresql.ENUM(
            "user", "admin", "user-ban", name="user_role", create_type=False
        ),
        nullable=False,
        server_default="user",
    ),
    Column("avatar_url", Text, nullable=True),
    # Denormalized lists of authored content, in creation order
    Column("post_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("comment_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column(
        "joined_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_joined_at", users_table.c.joined_at.desc())

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("title", String(200), nullable=False),
    Column("content", Text, nullable=False),
    Column("tags", ARRAY(String(50)), nullable=False, server_default="{}"),
    Column("media", ARRAY(Text), nullable=False, server_default="{}"),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    # Denormalized list of live comment ids, oldest first
    Column("comment_ids", ARRAY(UUID), nullable=False, server_default="{}"),
    Column("view_count", Integer, nullable=False, server_default="0"),
    Column("is_pinned", Boolean, nullable=False, server_default="false"),
    Column("is_locked", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0 AND downvotes >= 0", name="post_votes_non_negative"),
)

Index("idx_posts_created_at", posts_table.c.created_at.desc())
Index("idx_posts_author_id", posts_table.c.author_id)
Index("idx_posts_tags", posts_table.c.tags, postgresql_using="gin")

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("post_id", UUID, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("parent_id", UUID, ForeignKey("comments.id"), nullable=True),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("content", Text, nullable=False),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("is_edited", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "upvotes >= 0 AND downvotes >= 0", name="comment_votes_non_negative"
    ),
)

Index("idx_comments_post_id", comments_table.c.post_id)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_author_id", comments_table.c.author_id)

# ============================================================================
# VOTES TABLE
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    # "{votable_id}_{user_id}"
    Column("id", String(80), primary_key=True),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column(
        "votable_type",
        postgresql.ENUM("post", "comment", name="votable_type", create_type=False),
        nullable=False,
    ),
    Column("votable_id", UUID, nullable=False),
    Column("value", SmallInteger, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("value BETWEEN -1 AND 1", name="vote_value_range"),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="uq_user_vote"),
)

Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)
Index("idx_votes_user_updated", votes_table.c.user_id, votes_table.c.updated_at.desc())

# ============================================================================
# FEEDBACK TABLE
# ============================================================================
feedback_table = Table(
    "feedback",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_feedback_created_at", feedback_table.c.created_at.desc())
Index("idx_feedback_user_id", feedback_table.c.user_id)
