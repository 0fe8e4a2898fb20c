"""
Celebrity Penpal - Letter Submission

Flow per letter:
    received -> authorized -> address checked -> persisted (processing)
             -> [fulfillment attempted] -> sent | pending

Validation and authorization failures raise before anything is written.
Once the letter row exists the caller always gets a success result: a
provider failure only downgrades the row to `pending` and is logged.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from ..errors import MissingFieldError, NoAddressError, RecipientNotFoundError, FulfillmentError
from ..models.db_models import MAX_ROW_ID, CelebrityDB, LetterDB, LetterStatus, UserDB
from .fulfillment import HandwryttenClient, DEFAULT_STYLE
from .visibility import VisibilityPolicy, visibility_policy

logger = logging.getLogger(__name__)


@dataclass
class SubmissionResult:
    letter_id: int
    status: str
    message: str
    handwrytten_order_id: Optional[str] = None
    preview_url: Optional[str] = None
    success: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # Only present when the provider actually accepted the order
        if self.handwrytten_order_id is None:
            data.pop("handwrytten_order_id")
        if self.preview_url is None:
            data.pop("preview_url")
        return data


class LetterSubmissionService:
    """Validates, persists and forwards letter requests."""

    def __init__(
        self,
        db: Session,
        client: Optional[HandwryttenClient] = None,
        policy: Optional[VisibilityPolicy] = None,
    ):
        self.db = db
        self.client = client
        self.policy = policy or visibility_policy

    async def submit(
        self,
        celebrity_id: Optional[int],
        customer_email: Optional[str],
        message: Optional[str],
        customer_name: Optional[str] = None,
        handwriting_style: Optional[str] = None,
        return_address: Optional[str] = None,
        sender_name: Optional[str] = None,
        user: Optional[UserDB] = None,
    ) -> SubmissionResult:
        if not celebrity_id or not customer_email or not message:
            raise MissingFieldError("Missing required fields")

        celebrity = None
        if 0 < celebrity_id <= MAX_ROW_ID:
            celebrity = self.db.query(CelebrityDB).filter(CelebrityDB.id == celebrity_id).first()
        if celebrity is None:
            raise RecipientNotFoundError()

        self.policy.ensure_sendable(celebrity, user)

        if not (celebrity.fanmail_address or "").strip():
            raise NoAddressError()

        style = handwriting_style or DEFAULT_STYLE
        letter = LetterDB(
            celebrity_id=celebrity.id,
            customer_email=customer_email,
            customer_name=customer_name or "Anonymous",
            message=message,
            handwriting_style=style,
            status=LetterStatus.PROCESSING.value,
        )
        self.db.add(letter)
        self.db.commit()
        self.db.refresh(letter)
        logger.info(f"Letter {letter.id} to celebrity {celebrity.id} recorded ({letter.status})")

        queued_message = f"Letter to {celebrity.name} queued for processing"

        if self.client is None:
            self._mark_pending(letter)
            return SubmissionResult(
                letter_id=letter.id,
                status=letter.status,
                message=queued_message,
            )

        try:
            result = await self.client.send_letter(
                celebrity,
                message,
                handwriting_style=style,
                return_address=return_address,
                sender_name=sender_name,
            )
        except FulfillmentError as e:
            logger.error(f"Handwrytten API error for letter {letter.id}: {e}")
            self._mark_pending(letter)
            return SubmissionResult(
                letter_id=letter.id,
                status=letter.status,
                message=queued_message,
            )

        letter.handwrytten_order_id = result.order_id
        letter.status = result.status
        self.db.commit()
        logger.info(f"Letter {letter.id} sent via Handwrytten order {result.order_id}")

        return SubmissionResult(
            letter_id=letter.id,
            status=letter.status,
            message=f"Your letter to {celebrity.name} has been sent!",
            handwrytten_order_id=result.order_id,
            preview_url=result.preview_url,
        )

    def _mark_pending(self, letter: LetterDB) -> None:
        letter.status = LetterStatus.PENDING.value
        self.db.commit()
        logger.info(f"Letter {letter.id} marked pending for manual processing")
