"""
Celebrity Penpal - Forum Service
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from ..errors import MissingFieldError, NotFoundError
from ..models.db_models import MAX_ROW_ID, CelebrityDB, ForumReplyDB, ForumTopicDB, UserDB
from .visibility import VisibilityPolicy, visibility_policy

logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


def _public_celebrity_join():
    return and_(ForumTopicDB.celebrity_id == CelebrityDB.id, CelebrityDB.is_public.is_(True))


class ForumService:
    """
    Topics and replies are public. Only public profiles lend their name to a
    topic, so a link to a private profile never reveals it.
    """

    def __init__(self, db: Session, policy: Optional[VisibilityPolicy] = None):
        self.db = db
        self.policy = policy or visibility_policy

    def list_topics(self) -> List[Dict[str, Any]]:
        """Topics newest first, with linked celebrity name and reply count."""
        reply_counts = self.db.query(
            ForumReplyDB.topic_id.label("topic_id"),
            func.count(ForumReplyDB.id).label("reply_count"),
        ).group_by(ForumReplyDB.topic_id).subquery()

        rows = self.db.query(
            ForumTopicDB,
            CelebrityDB.name,
            func.coalesce(reply_counts.c.reply_count, 0),
        ).outerjoin(
            CelebrityDB, _public_celebrity_join()
        ).outerjoin(
            reply_counts, reply_counts.c.topic_id == ForumTopicDB.id
        ).order_by(ForumTopicDB.created_at.desc(), ForumTopicDB.id.desc()).all()

        return [
            {"topic": topic, "celebrity_name": celebrity_name, "reply_count": int(reply_count)}
            for topic, celebrity_name, reply_count in rows
        ]

    def get_topic(self, topic_id: int) -> Tuple[ForumTopicDB, Optional[str], List[ForumReplyDB]]:
        row = self.db.query(ForumTopicDB, CelebrityDB.name).outerjoin(
            CelebrityDB, _public_celebrity_join()
        ).filter(ForumTopicDB.id == topic_id).first()

        if row is None:
            raise NotFoundError("Topic not found")

        topic, celebrity_name = row
        replies = self.db.query(ForumReplyDB).filter(
            ForumReplyDB.topic_id == topic_id
        ).order_by(ForumReplyDB.created_at, ForumReplyDB.id).all()

        return topic, celebrity_name, replies

    def create_topic(
        self,
        title: Optional[str],
        content: Optional[str],
        celebrity_id: Optional[int] = None,
        author_name: Optional[str] = None,
        user: Optional[UserDB] = None,
    ) -> ForumTopicDB:
        if not title or not content:
            raise MissingFieldError("Title and content required")

        if celebrity_id:
            self._ensure_linkable(celebrity_id, user)

        topic = ForumTopicDB(
            title=title,
            celebrity_id=celebrity_id or None,
            author_name=author_name or ANONYMOUS,
            content=content,
        )
        self.db.add(topic)
        self.db.commit()
        self.db.refresh(topic)

        logger.info(f"Forum topic {topic.id} created")
        return topic

    def _ensure_linkable(self, celebrity_id: int, user: Optional[UserDB]) -> None:
        profile = None
        if 0 < celebrity_id <= MAX_ROW_ID:
            profile = self.db.query(CelebrityDB).filter(CelebrityDB.id == celebrity_id).first()
        self.policy.ensure_readable(profile, user)

    def add_reply(
        self,
        topic_id: int,
        content: Optional[str],
        author_name: Optional[str] = None,
    ) -> ForumReplyDB:
        if not content:
            raise MissingFieldError("Content required")

        exists = self.db.query(ForumTopicDB.id).filter(ForumTopicDB.id == topic_id).first()
        if exists is None:
            raise NotFoundError("Topic not found")

        reply = ForumReplyDB(
            topic_id=topic_id,
            author_name=author_name or ANONYMOUS,
            content=content,
        )
        self.db.add(reply)
        self.db.commit()
        self.db.refresh(reply)
        return reply
