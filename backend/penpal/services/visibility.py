"""
Celebrity Penpal - Visibility Policy

Public profiles are readable by anyone and accept letters from anyone.
Private profiles are readable by, and accept letters from, their creator only.
A private profile must look exactly like a missing one to everyone else.

Listing policy: a caller with a valid token sees public profiles plus every
profile they created. Anonymous callers see public profiles only.
"""
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query

from ..errors import AuthorizationError, NotFoundError
from ..models.db_models import CelebrityDB, UserDB


NOT_FOUND_MESSAGE = "Celebrity not found"


class VisibilityPolicy:
    """Pure access decisions over CelebrityDB rows. Never mutates state."""

    def filter_visible(self, query: Query, user: Optional[UserDB]) -> Query:
        """Restrict a CelebrityDB query to the rows `user` may list."""
        if user is None:
            return query.filter(CelebrityDB.is_public.is_(True))
        return query.filter(
            or_(CelebrityDB.is_public.is_(True), CelebrityDB.created_by_user_id == user.id)
        )

    def is_creator(self, profile: CelebrityDB, user: Optional[UserDB]) -> bool:
        return (
            user is not None
            and profile.created_by_user_id is not None
            and profile.created_by_user_id == user.id
        )

    def can_read(self, profile: CelebrityDB, user: Optional[UserDB]) -> bool:
        if profile.is_public:
            return True
        return self.is_creator(profile, user)

    def can_send(self, profile: CelebrityDB, user: Optional[UserDB]) -> bool:
        return self.can_read(profile, user)

    def ensure_readable(self, profile: Optional[CelebrityDB], user: Optional[UserDB]) -> CelebrityDB:
        """Return the profile, or raise NotFoundError for missing and hidden alike."""
        if profile is None or not self.can_read(profile, user):
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return profile

    def ensure_sendable(self, profile: CelebrityDB, user: Optional[UserDB]) -> CelebrityDB:
        if not self.can_send(profile, user):
            raise AuthorizationError("Cannot send to this recipient")
        return profile


visibility_policy = VisibilityPolicy()
