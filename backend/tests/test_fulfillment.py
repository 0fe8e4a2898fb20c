"""
Handwrytten Client Tests

Verifies:
1. Style -> font mapping, unknown styles fall back to casual
2. Recipient and sender blocks are built from parsed addresses
3. One POST with a 30 second timeout, result fields parsed
4. Network errors, timeouts, HTTP rejections, error payloads and bad
   addresses all surface as FulfillmentError
"""
import asyncio
from types import SimpleNamespace
from unittest.mock import patch

import aiohttp
import pytest

from penpal.errors import FulfillmentError
from penpal.services.fulfillment import FONT_MAP, HandwryttenClient, font_for_style


ADDRESS = "Jane Doe\n123 Main St\nSpringfield, IL 62704"


class FakeResponse:

    def __init__(self, status=200, payload=None, text=""):
        self.status = status
        self.payload = payload
        self._text = text

    async def json(self, content_type=None):
        if isinstance(self.payload, Exception):
            raise self.payload
        return self.payload

    async def text(self):
        return self._text

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False


class FakeSession:
    """Replaces aiohttp.ClientSession: calling it returns itself."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.posts = []
        self.session_kwargs = None

    def __call__(self, **kwargs):
        self.session_kwargs = kwargs
        return self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return False

    def post(self, url, json=None):
        self.posts.append((url, json))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def hw_client():
    return HandwryttenClient(api_key="key", api_secret="secret", base_url="https://hw.test/v1/")


@pytest.fixture
def profile():
    return SimpleNamespace(id=5, name="Jane Doe", fanmail_address=ADDRESS)


def _send(client, profile, session, **kwargs):
    with patch("penpal.services.fulfillment.aiohttp.ClientSession", session):
        return asyncio.run(client.send_letter(profile, "Hello there", **kwargs))


# =============================================================================
# FONTS & PAYLOAD
# =============================================================================

class TestPayload:

    @pytest.mark.parametrize("style", ["casual", "elegant", "playful"])
    def test_known_styles(self, style):
        assert font_for_style(style) == FONT_MAP[style]

    @pytest.mark.parametrize("style", [None, "", "gothic", "ELEGANTISH"])
    def test_unknown_style_uses_casual(self, style):
        assert font_for_style(style) == FONT_MAP["casual"]

    def test_style_is_case_insensitive(self):
        assert font_for_style(" Playful ") == FONT_MAP["playful"]

    def test_recipient_block(self, hw_client, profile):
        payload = hw_client.build_payload(profile, "Hi", handwriting_style="elegant")
        assert payload["apiKey"] == "key"
        assert payload["apiSecret"] == "secret"
        assert payload["message"] == "Hi"
        assert payload["font"] == FONT_MAP["elegant"]
        assert payload["recipient"]["name"] == "Jane Doe"
        assert payload["recipient"]["city"] == "Springfield"
        assert payload["recipient"]["zip"] == "62704"
        assert payload["recipient"]["country"] == "US"
        assert "sender" not in payload

    def test_sender_block_from_return_address(self, hw_client, profile):
        payload = hw_client.build_payload(
            profile, "Hi",
            return_address="Fan Person\n9 Elm St\nDover, DE 19901",
            sender_name="Biggest Fan",
        )
        assert payload["sender"]["name"] == "Biggest Fan"
        assert payload["sender"]["address1"] == "9 Elm St"
        assert payload["sender"]["state"] == "DE"

    def test_sender_name_only(self, hw_client, profile):
        payload = hw_client.build_payload(profile, "Hi", sender_name="Biggest Fan")
        assert payload["sender"] == {"name": "Biggest Fan"}


# =============================================================================
# SENDING
# =============================================================================

class TestSend:

    def test_success(self, hw_client, profile):
        session = FakeSession(response=FakeResponse(
            200, {"order_id": 42, "status": "sent", "preview_url": "https://hw.test/p/42"}
        ))

        result = _send(hw_client, profile, session, handwriting_style="playful")

        assert result.order_id == "42"
        assert result.status == "sent"
        assert result.preview_url == "https://hw.test/p/42"
        assert len(session.posts) == 1
        url, body = session.posts[0]
        assert url == "https://hw.test/v1/letters/create"
        assert body["font"] == FONT_MAP["playful"]
        assert session.session_kwargs["timeout"].total == 30.0

    def test_ok_status_is_reported_as_sent(self, hw_client, profile):
        session = FakeSession(response=FakeResponse(200, {"id": "A1", "status": "OK"}))
        result = _send(hw_client, profile, session)
        assert result.order_id == "A1"
        assert result.status == "sent"

    def test_http_rejection(self, hw_client, profile):
        session = FakeSession(response=FakeResponse(401, text="bad credentials"))
        with pytest.raises(FulfillmentError, match="401"):
            _send(hw_client, profile, session)

    def test_error_payload(self, hw_client, profile):
        session = FakeSession(response=FakeResponse(200, {"status": "error", "message": "no credits"}))
        with pytest.raises(FulfillmentError, match="no credits"):
            _send(hw_client, profile, session)

    def test_invalid_json(self, hw_client, profile):
        session = FakeSession(response=FakeResponse(200, ValueError("Expecting value")))
        with pytest.raises(FulfillmentError):
            _send(hw_client, profile, session)

    @pytest.mark.parametrize("error", [
        aiohttp.ClientConnectionError("connection refused"),
        asyncio.TimeoutError(),
    ])
    def test_transport_failures(self, hw_client, profile, error):
        session = FakeSession(error=error)
        with pytest.raises(FulfillmentError):
            _send(hw_client, profile, session)
        assert len(session.posts) == 1  # no retry

    def test_unusable_address_never_calls_provider(self, hw_client):
        session = FakeSession(response=FakeResponse(200, {"order_id": 1}))
        bad = SimpleNamespace(id=9, name="Nobody", fanmail_address="Just A Name")
        with pytest.raises(FulfillmentError, match="Unusable address"):
            _send(hw_client, bad, session)
        assert session.posts == []
