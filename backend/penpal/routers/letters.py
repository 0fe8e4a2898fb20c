"""
Celebrity Penpal - Letters API Router

Accepts letter requests and hands them to the submission flow. A letter that
was recorded is always reported as a success; provider trouble shows up only
as status "pending".
"""
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..auth import get_optional_user
from ..database import get_db
from ..models.db_models import UserDB
from ..services.fulfillment import HandwryttenClient
from ..services.letter_submission import LetterSubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/letters", tags=["letters"])


# =============================================================================
# PYDANTIC MODELS FOR API
# =============================================================================

class LetterRequest(BaseModel):
    celebrity_id: Optional[int] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    message: Optional[str] = None
    handwriting_style: Optional[str] = None  # casual, elegant, playful
    return_address: Optional[str] = None
    sender_name: Optional[str] = None


class LetterResponse(BaseModel):
    success: bool = True
    letter_id: int
    status: str
    message: str
    handwrytten_order_id: Optional[str] = None
    preview_url: Optional[str] = None


def get_fulfillment_client(request: Request) -> Optional[HandwryttenClient]:
    """None when Handwrytten credentials are not configured."""
    return request.app.state.fulfillment_client


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("", response_model=LetterResponse, response_model_exclude_none=True)
async def create_letter(
    request: LetterRequest,
    db: Session = Depends(get_db),
    user: Optional[UserDB] = Depends(get_optional_user),
    client: Optional[HandwryttenClient] = Depends(get_fulfillment_client),
):
    """
    Create a letter order and forward it to Handwrytten when configured.
    """
    service = LetterSubmissionService(db, client=client)
    result = await service.submit(
        celebrity_id=request.celebrity_id,
        customer_email=request.customer_email,
        message=request.message,
        customer_name=request.customer_name,
        handwriting_style=request.handwriting_style,
        return_address=request.return_address,
        sender_name=request.sender_name,
        user=user,
    )
    return LetterResponse(**result.to_dict())
