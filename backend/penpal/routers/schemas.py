"""
Celebrity Penpal - Shared API Models
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..errors import NotFoundError
from ..models.db_models import MAX_ROW_ID


class CelebrityResponse(BaseModel):
    """A directory profile as returned by every profile endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: Optional[str] = None
    image_url: Optional[str] = None
    bio: Optional[str] = None
    fanmail_address: Optional[str] = None
    verified: bool = False
    popularity_score: int = 0
    user_id: Optional[int] = None
    is_public: bool = True
    created_by_user_id: Optional[int] = None
    relationship_type: Optional[str] = None
    created_at: Optional[datetime] = None


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


def parse_id(raw: str, not_found_message: str) -> int:
    """
    Path id to int. Anything that is not a plain decimal number a row could
    carry is reported as not found.
    """
    if not raw.isascii() or not raw.isdecimal():
        raise NotFoundError(not_found_message)
    value = int(raw)
    if value < 1 or value > MAX_ROW_ID:
        raise NotFoundError(not_found_message)
    return value

