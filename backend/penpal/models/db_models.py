"""
Celebrity Penpal - SQLAlchemy ORM Models
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Integer, DateTime, Text, ForeignKey, Boolean
from sqlalchemy.orm import relationship
from ..database import Base

# Largest id a 64-bit signed INTEGER column can hold
MAX_ROW_ID = 2**63 - 1


# =============================================================================
# ENUMS
# =============================================================================

class LetterStatus(str, Enum):
    """Known letter statuses. The provider may report others on success."""
    PROCESSING = "processing"
    PENDING = "pending"
    SENT = "sent"


class RelationshipType(str, Enum):
    """Relationship of a profile to the user who created it."""
    SELF = "self"
    FAMILY = "family"


# =============================================================================
# TABLES
# =============================================================================

class UserDB(Base):
    """User account. `token` holds the bearer token issued at the last login."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    avatar_url = Column(String(500), nullable=True)
    token = Column(String(512), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class CelebrityDB(Base):
    """
    Directory profile: a curated celebrity, a user's own pen-pal identity
    (relationship_type="self"), or a private family contact.
    """
    __tablename__ = "celebrities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    category = Column(String(100), nullable=True)
    image_url = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)
    fanmail_address = Column(Text, nullable=True)
    verified = Column(Boolean, default=False)
    popularity_score = Column(Integer, default=0)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    is_public = Column(Boolean, default=True)
    created_by_user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    relationship_type = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    letters = relationship("LetterDB", back_populates="celebrity")


class LetterDB(Base):
    """A request to send a handwritten letter to a profile."""
    __tablename__ = "letters"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Cleared when a family member is removed; the letter itself is kept
    celebrity_id = Column(Integer, ForeignKey("celebrities.id", ondelete="SET NULL"), nullable=True, index=True)
    customer_email = Column(String(255), nullable=False)
    customer_name = Column(String(255), default="Anonymous")
    message = Column(Text, nullable=False)
    handwriting_style = Column(String(50), default="casual")
    status = Column(String(50), default=LetterStatus.PENDING.value)
    handwrytten_order_id = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    celebrity = relationship("CelebrityDB", back_populates="letters")


class ForumTopicDB(Base):
    __tablename__ = "forum_topics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    celebrity_id = Column(Integer, ForeignKey("celebrities.id", ondelete="SET NULL"), nullable=True)
    author_name = Column(String(255), default="Anonymous")
    content = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    celebrity = relationship("CelebrityDB")
    replies = relationship(
        "ForumReplyDB",
        back_populates="topic",
        order_by="ForumReplyDB.created_at",
    )


class ForumReplyDB(Base):
    __tablename__ = "forum_replies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    topic_id = Column(Integer, ForeignKey("forum_topics.id"), nullable=False, index=True)
    author_name = Column(String(255), default="Anonymous")
    content = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    topic = relationship("ForumTopicDB", back_populates="replies")
