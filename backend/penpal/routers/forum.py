"""
Celebrity Penpal - Forum Router
"""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..auth import get_optional_user
from ..database import get_db
from ..models.db_models import ForumReplyDB, ForumTopicDB, UserDB
from ..services.forum import ForumService
from .schemas import parse_id

router = APIRouter(prefix="/forum", tags=["forum"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class TopicRequest(BaseModel):
    title: Optional[str] = None
    celebrity_id: Optional[int] = None
    author_name: Optional[str] = None
    content: Optional[str] = None


class ReplyRequest(BaseModel):
    author_name: Optional[str] = None
    content: Optional[str] = None


class TopicResponse(BaseModel):
    id: int
    title: str
    celebrity_id: Optional[int] = None
    celebrity_name: Optional[str] = None
    author_name: Optional[str] = None
    content: Optional[str] = None
    created_at: Optional[datetime] = None
    reply_count: Optional[int] = None


class ReplyResponse(BaseModel):
    id: int
    topic_id: int
    author_name: Optional[str] = None
    content: Optional[str] = None
    created_at: Optional[datetime] = None


class TopicDetailResponse(BaseModel):
    topic: TopicResponse
    replies: List[ReplyResponse]


class TopicCreatedResponse(BaseModel):
    success: bool = True
    topic_id: int


class ReplyCreatedResponse(BaseModel):
    success: bool = True
    reply_id: int


# =============================================================================
# HELPERS
# =============================================================================

def _topic_response(
    topic: ForumTopicDB,
    celebrity_name: Optional[str],
    reply_count: Optional[int] = None,
) -> TopicResponse:
    return TopicResponse(
        id=topic.id,
        title=topic.title,
        celebrity_id=topic.celebrity_id,
        celebrity_name=celebrity_name,
        author_name=topic.author_name,
        content=topic.content,
        created_at=topic.created_at,
        reply_count=reply_count,
    )


def _reply_response(reply: ForumReplyDB) -> ReplyResponse:
    return ReplyResponse(
        id=reply.id,
        topic_id=reply.topic_id,
        author_name=reply.author_name,
        content=reply.content,
        created_at=reply.created_at,
    )


def _topic_id(raw: str) -> int:
    return parse_id(raw, "Topic not found")


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.get("/topics", response_model=List[TopicResponse])
async def list_topics(db: Session = Depends(get_db)):
    """All topics, newest first."""
    return [
        _topic_response(row["topic"], row["celebrity_name"], row["reply_count"])
        for row in ForumService(db).list_topics()
    ]


@router.get("/topics/{topic_id}", response_model=TopicDetailResponse)
async def get_topic(topic_id: str, db: Session = Depends(get_db)):
    topic, celebrity_name, replies = ForumService(db).get_topic(_topic_id(topic_id))
    return TopicDetailResponse(
        topic=_topic_response(topic, celebrity_name),
        replies=[_reply_response(r) for r in replies],
    )


@router.post("/topics", response_model=TopicCreatedResponse)
async def create_topic(
    request: TopicRequest,
    db: Session = Depends(get_db),
    user: Optional[UserDB] = Depends(get_optional_user),
):
    """A topic may only link a profile the caller can see."""
    topic = ForumService(db).create_topic(
        title=request.title,
        content=request.content,
        celebrity_id=request.celebrity_id,
        author_name=request.author_name,
        user=user,
    )
    return TopicCreatedResponse(topic_id=topic.id)


@router.post("/topics/{topic_id}/replies", response_model=ReplyCreatedResponse)
async def add_reply(topic_id: str, request: ReplyRequest, db: Session = Depends(get_db)):
    reply = ForumService(db).add_reply(
        _topic_id(topic_id),
        content=request.content,
        author_name=request.author_name,
    )
    return ReplyCreatedResponse(reply_id=reply.id)
