"""
Celebrity Penpal - Pen-pal Router
The signed-in user's own profile, private address book and inbox.
All endpoints require authentication.
"""
from datetime import datetime
from typing import Any, List, Optional
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.db_models import UserDB
from ..services.directory import DirectoryService
from .schemas import CelebrityResponse, SuccessResponse, parse_id

logger = logging.getLogger(__name__)

router = APIRouter(tags=["penpals"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class BecomePenpalRequest(BaseModel):
    fanmail_address: Optional[str] = None
    bio: Optional[str] = None
    category: Optional[str] = None
    is_public: Any = None  # true, "true" or 1 -> public; anything else private


class BecomePenpalResponse(BaseModel):
    success: bool = True
    celebrity_id: int
    is_public: bool
    message: str


class FamilyMemberRequest(BaseModel):
    name: Optional[str] = None
    fanmail_address: Optional[str] = None
    relationship_type: Optional[str] = None
    bio: Optional[str] = None


class FamilyMemberResponse(BaseModel):
    success: bool = True
    celebrity_id: int
    name: str
    message: str


class ReceivedLetterResponse(BaseModel):
    id: int
    celebrity_id: int
    celebrity_name: str
    customer_email: str
    customer_name: Optional[str] = None
    message: str
    handwriting_style: Optional[str] = None
    status: str
    handwrytten_order_id: Optional[str] = None
    created_at: Optional[datetime] = None


# =============================================================================
# PEN-PAL PROFILE
# =============================================================================

@router.post("/become-penpal", response_model=BecomePenpalResponse)
async def become_penpal(
    request: BecomePenpalRequest,
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Create or update the caller's pen-pal profile.
    """
    service = DirectoryService(db)
    profile, created = service.become_penpal(
        current_user,
        fanmail_address=request.fanmail_address,
        bio=request.bio,
        category=request.category,
        is_public=request.is_public,
    )

    if created:
        message = (
            "Welcome to Celebrity Penpal! Your public profile is live."
            if profile.is_public
            else "Private profile created - only you can send letters here."
        )
    else:
        message = (
            "Public profile updated!"
            if profile.is_public
            else "Private profile updated - only you can send letters to this address."
        )

    return BecomePenpalResponse(celebrity_id=profile.id, is_public=profile.is_public, message=message)


@router.get("/my-penpal-profile", response_model=Optional[CelebrityResponse])
async def my_penpal_profile(
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's own profile, or null."""
    return DirectoryService(db).my_penpal_profile(current_user)


# =============================================================================
# FAMILY MEMBERS
# =============================================================================

@router.post("/add-family-member", response_model=FamilyMemberResponse)
async def add_family_member(
    request: FamilyMemberRequest,
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Add a private contact. Only the caller can see it or write to it.
    """
    member = DirectoryService(db).add_family_member(
        current_user,
        name=request.name,
        fanmail_address=request.fanmail_address,
        relationship_type=request.relationship_type,
        bio=request.bio,
    )
    return FamilyMemberResponse(
        celebrity_id=member.id,
        name=member.name,
        message=(
            f"{member.name} has been added to your private address book! "
            "You can now send them handwritten letters anytime."
        ),
    )


@router.get("/my-family-members", response_model=List[CelebrityResponse])
async def my_family_members(
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return DirectoryService(db).my_family_members(current_user)


@router.delete("/family-member/{member_id}", response_model=SuccessResponse)
async def delete_family_member(
    member_id: str,
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    DirectoryService(db).delete_family_member(
        current_user, parse_id(member_id, "Family member not found")
    )
    return SuccessResponse(message="Family member removed")


# =============================================================================
# INBOX
# =============================================================================

@router.get("/my-letters", response_model=List[ReceivedLetterResponse])
async def my_letters(
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Letters sent to the caller's pen-pal profile, newest first."""
    return [
        ReceivedLetterResponse(
            id=letter.id,
            celebrity_id=letter.celebrity_id,
            celebrity_name=celebrity_name,
            customer_email=letter.customer_email,
            customer_name=letter.customer_name,
            message=letter.message,
            handwriting_style=letter.handwriting_style,
            status=letter.status,
            handwrytten_order_id=letter.handwrytten_order_id,
            created_at=letter.created_at,
        )
        for letter, celebrity_name in DirectoryService(db).my_letters(current_user)
    ]
