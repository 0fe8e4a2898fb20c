"""
Celebrity Penpal - Directory Router
Public celebrity listing and single-profile lookup.
"""
from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..auth import get_optional_user
from ..database import get_db
from ..models.db_models import UserDB
from ..services.directory import DirectoryService, DEFAULT_LIMIT
from ..services.visibility import NOT_FOUND_MESSAGE
from .schemas import CelebrityResponse, parse_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/celebrities", tags=["celebrities"])


@router.get("", response_model=List[CelebrityResponse])
async def list_celebrities(
    category: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    limit: Optional[str] = Query(str(DEFAULT_LIMIT)),
    db: Session = Depends(get_db),
    user: Optional[UserDB] = Depends(get_optional_user),
):
    """
    List profiles visible to the caller: public ones, plus the caller's own
    private profiles when a valid token is sent.
    """
    logger.debug(
        f"Listing celebrities: category={category} search={search} limit={limit} "
        f"authenticated={user is not None}"
    )
    service = DirectoryService(db)
    return service.list_celebrities(category=category, search=search, limit=limit, user=user)


@router.get("/{celebrity_id}", response_model=CelebrityResponse)
async def get_celebrity(
    celebrity_id: str,
    db: Session = Depends(get_db),
    user: Optional[UserDB] = Depends(get_optional_user),
):
    """
    Single profile. Private profiles 404 for anyone but their creator.
    """
    service = DirectoryService(db)
    return service.get_celebrity(parse_id(celebrity_id, NOT_FOUND_MESSAGE), user=user)
