"""
Celebrity Penpal - Directory Service

Profile listing and lookup, plus the signed-in user's own pen-pal profile
and private address book of family members.
"""
from __future__ import annotations
import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..errors import MissingFieldError, NotFoundError
from ..models.db_models import CelebrityDB, ForumTopicDB, LetterDB, RelationshipType, UserDB
from .visibility import VisibilityPolicy, visibility_policy

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100
DEFAULT_CATEGORY = "fan"
FAMILY_CATEGORY = "family"


def clamp_limit(limit: Any) -> int:
    """Parse a listing limit; garbage falls back to the default, range is 1..100."""
    try:
        value = int(str(limit).strip())
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return max(1, min(value, MAX_LIMIT))


def coerce_public_flag(value: Any) -> bool:
    """Only true, "true" and 1 make a profile public; anything else is private."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value == "true"
    return False


class DirectoryService:

    def __init__(self, db: Session, policy: Optional[VisibilityPolicy] = None):
        self.db = db
        self.policy = policy or visibility_policy

    # =========================================================================
    # PUBLIC DIRECTORY
    # =========================================================================

    def list_celebrities(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        limit: Any = DEFAULT_LIMIT,
        user: Optional[UserDB] = None,
    ) -> List[CelebrityDB]:
        query = self.policy.filter_visible(self.db.query(CelebrityDB), user)

        if category and category != "all":
            query = query.filter(CelebrityDB.category == category)

        if search:
            query = query.filter(CelebrityDB.name.like(f"%{search}%"))

        return query.order_by(
            CelebrityDB.verified.desc(),
            CelebrityDB.popularity_score.desc(),
            CelebrityDB.name,
        ).limit(clamp_limit(limit)).all()

    def get_celebrity(self, celebrity_id: int, user: Optional[UserDB] = None) -> CelebrityDB:
        profile = self.db.query(CelebrityDB).filter(CelebrityDB.id == celebrity_id).first()
        return self.policy.ensure_readable(profile, user)

    # =========================================================================
    # PEN-PAL PROFILE
    # =========================================================================

    def become_penpal(
        self,
        user: UserDB,
        fanmail_address: Optional[str],
        bio: Optional[str] = None,
        category: Optional[str] = None,
        is_public: Any = None,
    ) -> Tuple[CelebrityDB, bool]:
        """
        Create or update the user's own profile in one commit.
        Returns (profile, created).
        """
        if not fanmail_address:
            raise MissingFieldError("Address required")

        public = coerce_public_flag(is_public)
        profile = self.my_penpal_profile(user)
        created = profile is None

        if created:
            profile = CelebrityDB(
                name=user.display_name or user.email.split("@")[0],
                user_id=user.id,
                created_by_user_id=user.id,
                relationship_type=RelationshipType.SELF.value,
                verified=False,
                popularity_score=0,
            )
            self.db.add(profile)

        profile.fanmail_address = fanmail_address
        profile.bio = bio
        profile.category = category or DEFAULT_CATEGORY
        profile.is_public = public

        self.db.commit()
        self.db.refresh(profile)

        logger.info(
            f"Pen-pal profile {'created' if created else 'updated'} for user {user.id} "
            f"(celebrity {profile.id}, public={public})"
        )
        return profile, created

    def my_penpal_profile(self, user: UserDB) -> Optional[CelebrityDB]:
        return self.db.query(CelebrityDB).filter(CelebrityDB.user_id == user.id).first()

    # =========================================================================
    # FAMILY MEMBERS
    # =========================================================================

    def add_family_member(
        self,
        user: UserDB,
        name: Optional[str],
        fanmail_address: Optional[str],
        relationship_type: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> CelebrityDB:
        if not name or not fanmail_address:
            raise MissingFieldError("Name and address required")

        owner_name = user.display_name or user.email
        member = CelebrityDB(
            name=name,
            category=FAMILY_CATEGORY,
            bio=bio or f"{relationship_type or 'Family member'} of {owner_name}",
            fanmail_address=fanmail_address,
            user_id=None,
            verified=False,
            popularity_score=0,
            is_public=False,
            created_by_user_id=user.id,
            relationship_type=relationship_type or RelationshipType.FAMILY.value,
        )
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)

        logger.info(f"Family member {member.id} added by user {user.id}")
        return member

    def my_family_members(self, user: UserDB) -> List[CelebrityDB]:
        return self.db.query(CelebrityDB).filter(
            CelebrityDB.created_by_user_id == user.id,
            CelebrityDB.relationship_type != RelationshipType.SELF.value,
        ).order_by(CelebrityDB.name).all()

    def delete_family_member(self, user: UserDB, member_id: int) -> None:
        """
        Hard delete. Never touches the user's own `self` profile. Letters and
        forum topics addressed to the member are kept and lose their link.
        """
        member = self.db.query(CelebrityDB.id).filter(
            CelebrityDB.id == member_id,
            CelebrityDB.created_by_user_id == user.id,
            CelebrityDB.relationship_type != RelationshipType.SELF.value,
        ).first()
        if member is None:
            raise NotFoundError("Family member not found")

        self.db.query(LetterDB).filter(LetterDB.celebrity_id == member_id).update(
            {LetterDB.celebrity_id: None}, synchronize_session=False
        )
        self.db.query(ForumTopicDB).filter(ForumTopicDB.celebrity_id == member_id).update(
            {ForumTopicDB.celebrity_id: None}, synchronize_session=False
        )
        self.db.query(CelebrityDB).filter(CelebrityDB.id == member_id).delete(synchronize_session=False)
        self.db.commit()
        logger.info(f"Family member {member_id} removed by user {user.id}")

    # =========================================================================
    # INBOX
    # =========================================================================

    def my_letters(self, user: UserDB) -> List[Tuple[LetterDB, str]]:
        """Letters addressed to the user's pen-pal profile, newest first."""
        profile = self.my_penpal_profile(user)
        if profile is None:
            return []

        rows = self.db.query(LetterDB, CelebrityDB.name).join(
            CelebrityDB, LetterDB.celebrity_id == CelebrityDB.id
        ).filter(
            LetterDB.celebrity_id == profile.id
        ).order_by(LetterDB.created_at.desc(), LetterDB.id.desc()).all()

        return [(letter, name) for letter, name in rows]
