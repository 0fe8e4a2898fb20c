"""Celebrity Penpal - Data Models"""
from .db_models import (
    LetterStatus, RelationshipType,
    UserDB, CelebrityDB, LetterDB, ForumTopicDB, ForumReplyDB,
)

__all__ = [
    "LetterStatus", "RelationshipType",
    "UserDB", "CelebrityDB", "LetterDB", "ForumTopicDB", "ForumReplyDB",
]
