"""
Celebrity Penpal - Handwrytten Fulfillment Client

Sends a letter order to the Handwrytten API. One POST, fixed timeout, no
retry: any failure is raised as FulfillmentError and the caller decides what
to do with the letter.
"""
from __future__ import annotations
import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aiohttp

from ..errors import FulfillmentError, InvalidAddressError
from ..models.db_models import CelebrityDB, LetterStatus
from .address_parser import AddressParser, default_parser

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_STYLE = "casual"

# Handwriting style -> Handwrytten font id
FONT_MAP = {
    "casual": "hwJenna",
    "elegant": "hwVictoria",
    "playful": "hwMaddie",
}

CREATE_LETTER_PATH = "/letters/create"


def font_for_style(style: Optional[str]) -> str:
    """Map a handwriting style to a provider font. Unknown styles use casual."""
    key = (style or DEFAULT_STYLE).strip().lower()
    return FONT_MAP.get(key, FONT_MAP[DEFAULT_STYLE])


@dataclass
class FulfillmentResult:
    order_id: Optional[str]
    status: str
    preview_url: Optional[str] = None


class HandwryttenClient:
    """Thin async wrapper around the Handwrytten letters endpoint."""

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.handwrytten.com/v1",
        timeout: float = 30.0,
        address_parser: Optional[AddressParser] = None,
    ):
        self.api_key = api_key
        self.api_secret = api_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.address_parser = address_parser or default_parser

    # =========================================================================
    # PAYLOAD
    # =========================================================================

    def build_payload(
        self,
        profile: CelebrityDB,
        message: str,
        handwriting_style: Optional[str] = None,
        return_address: Optional[str] = None,
        sender_name: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Shape the outbound order. Raises InvalidAddressError when the
        recipient (or a supplied return address) has fewer than two lines.
        """
        recipient = self.address_parser.parse(profile.fanmail_address)

        payload: Dict[str, Any] = {
            "apiKey": self.api_key,
            "apiSecret": self.api_secret,
            "recipient": recipient.to_dict(),
            "message": message,
            "font": font_for_style(handwriting_style),
        }

        if return_address:
            sender = self.address_parser.parse(return_address)
            if sender_name:
                sender.name = sender_name
            payload["sender"] = sender.to_dict()
        elif sender_name:
            payload["sender"] = {"name": sender_name}

        return payload

    # =========================================================================
    # SEND
    # =========================================================================

    async def send_letter(
        self,
        profile: CelebrityDB,
        message: str,
        handwriting_style: Optional[str] = None,
        return_address: Optional[str] = None,
        sender_name: Optional[str] = None,
    ) -> FulfillmentResult:
        try:
            payload = self.build_payload(
                profile, message,
                handwriting_style=handwriting_style,
                return_address=return_address,
                sender_name=sender_name,
            )
        except InvalidAddressError as e:
            raise FulfillmentError(f"Unusable address for celebrity {profile.id}: {e.message}") from e

        url = f"{self.base_url}{CREATE_LETTER_PATH}"
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(url, json=payload) as response:
                    if response.status >= 400:
                        error_text = await response.text()
                        raise FulfillmentError(
                            f"Handwrytten rejected order: {response.status} - {error_text[:500]}"
                        )
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise FulfillmentError(f"Handwrytten request failed: {e!r}") from e
        except ValueError as e:
            raise FulfillmentError(f"Handwrytten returned invalid JSON: {e}") from e

        return self._parse_response(data)

    def _parse_response(self, data: Any) -> FulfillmentResult:
        if not isinstance(data, dict):
            raise FulfillmentError(f"Unexpected Handwrytten response: {data!r}")

        http_code = data.get("httpCode")
        if (isinstance(http_code, int) and http_code >= 400) or str(data.get("status", "")).lower() == "error":
            raise FulfillmentError(f"Handwrytten error: {data.get('message') or data}")

        order_id = data.get("order_id") or data.get("id")
        status = data.get("status")
        if not status or str(status).lower() in ("ok", "success"):
            status = LetterStatus.SENT.value

        logger.info(f"Handwrytten accepted order {order_id} ({status})")
        return FulfillmentResult(
            order_id=str(order_id) if order_id is not None else None,
            status=str(status),
            preview_url=data.get("preview_url"),
        )
