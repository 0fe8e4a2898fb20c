"""
Letter Submission Flow Tests

Verifies:
1. Missing fields, unknown or out-of-range recipients, forbidden and
   address-less recipients are rejected before any letter row is written
2. Without a fulfillment client the letter is stored and returned as pending
3. A provider success stores the provider's status and order id
4. A provider failure is absorbed: stored as pending, still a success
"""
import asyncio

import pytest

from penpal.errors import (
    AuthorizationError,
    MissingFieldError,
    NoAddressError,
    RecipientNotFoundError,
)
from penpal.models.db_models import LetterDB, LetterStatus
from penpal.services.letter_submission import LetterSubmissionService

from conftest import make_celebrity, make_user


def _submit(service, **kwargs):
    params = {
        "celebrity_id": None,
        "customer_email": "fan@example.com",
        "message": "Thank you for everything!",
    }
    params.update(kwargs)
    return asyncio.run(service.submit(**params))


def _letter_count(db):
    return db.query(LetterDB).count()


# =============================================================================
# REJECTIONS
# =============================================================================

class TestRejectedBeforePersistence:

    @pytest.mark.parametrize("missing", ["celebrity_id", "customer_email", "message"])
    def test_missing_required_field(self, db_session, missing):
        star = make_celebrity(db_session)
        service = LetterSubmissionService(db_session)
        kwargs = {"celebrity_id": star.id, missing: None}

        with pytest.raises(MissingFieldError):
            _submit(service, **kwargs)
        assert _letter_count(db_session) == 0

    def test_empty_message_counts_as_missing(self, db_session):
        star = make_celebrity(db_session)
        with pytest.raises(MissingFieldError):
            _submit(LetterSubmissionService(db_session), celebrity_id=star.id, message="")
        assert _letter_count(db_session) == 0

    def test_unknown_recipient(self, db_session):
        with pytest.raises(RecipientNotFoundError):
            _submit(LetterSubmissionService(db_session), celebrity_id=999)
        assert _letter_count(db_session) == 0

    @pytest.mark.parametrize("celebrity_id", [2**63, 10**20, -5])
    def test_recipient_id_outside_row_range(self, db_session, celebrity_id):
        with pytest.raises(RecipientNotFoundError):
            _submit(LetterSubmissionService(db_session), celebrity_id=celebrity_id)
        assert _letter_count(db_session) == 0

    def test_private_recipient_rejects_strangers(self, db_session):
        owner = make_user(db_session)
        stranger = make_user(db_session, email="stranger@example.com")
        aunt = make_celebrity(db_session, name="Aunt May", is_public=False, created_by=owner)
        service = LetterSubmissionService(db_session)

        with pytest.raises(AuthorizationError):
            _submit(service, celebrity_id=aunt.id)
        with pytest.raises(AuthorizationError):
            _submit(service, celebrity_id=aunt.id, user=stranger)
        assert _letter_count(db_session) == 0

    @pytest.mark.parametrize("address", [None, "", "   "])
    def test_recipient_without_address(self, db_session, address):
        star = make_celebrity(db_session, address=address)
        with pytest.raises(NoAddressError):
            _submit(LetterSubmissionService(db_session), celebrity_id=star.id)
        assert _letter_count(db_session) == 0


# =============================================================================
# ACCEPTED
# =============================================================================

class TestAccepted:

    def test_no_client_stores_pending(self, db_session):
        star = make_celebrity(db_session)
        result = _submit(LetterSubmissionService(db_session), celebrity_id=star.id)

        assert result.success is True
        assert result.status == LetterStatus.PENDING.value
        letter = db_session.query(LetterDB).one()
        assert letter.id == result.letter_id
        assert letter.status == "pending"
        assert letter.customer_name == "Anonymous"
        assert letter.handwriting_style == "casual"
        assert letter.handwrytten_order_id is None

    def test_creator_can_write_to_private_profile(self, db_session):
        owner = make_user(db_session)
        aunt = make_celebrity(db_session, name="Aunt May", is_public=False, created_by=owner)
        result = _submit(LetterSubmissionService(db_session), celebrity_id=aunt.id, user=owner)
        assert result.success is True

    def test_provider_success_records_order(self, db_session, succeeding_client):
        star = make_celebrity(db_session)
        service = LetterSubmissionService(db_session, client=succeeding_client)

        result = _submit(
            service,
            celebrity_id=star.id,
            handwriting_style="elegant",
            return_address="Fan Person\n9 Elm St\nDover, DE 19901",
            sender_name="Fan",
        )

        assert result.status == "sent"
        assert result.handwrytten_order_id == "HW-2002"
        assert result.preview_url == "https://example.test/p/2002"
        letter = db_session.query(LetterDB).one()
        assert letter.status == "sent"
        assert letter.handwrytten_order_id == "HW-2002"

        call = succeeding_client.calls[0]
        assert call["profile"].id == star.id
        assert call["handwriting_style"] == "elegant"
        assert call["sender_name"] == "Fan"

    def test_provider_failure_falls_back_to_pending(self, db_session, failing_client):
        star = make_celebrity(db_session)
        service = LetterSubmissionService(db_session, client=failing_client)

        result = _submit(service, celebrity_id=star.id)

        assert result.success is True
        assert result.status == "pending"
        assert result.handwrytten_order_id is None
        assert "handwrytten_order_id" not in result.to_dict()
        letter = db_session.query(LetterDB).one()
        assert letter.status == "pending"
        assert len(failing_client.calls) == 1
