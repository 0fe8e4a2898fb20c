"""Celebrity Penpal - Services"""
from .address_parser import AddressParser, RegexAddressParser, ParsedAddress, parse_address
from .visibility import VisibilityPolicy, visibility_policy
from .fulfillment import HandwryttenClient, FulfillmentResult, FONT_MAP, font_for_style
from .letter_submission import LetterSubmissionService, SubmissionResult
from .directory import DirectoryService
from .forum import ForumService
from .seed import seed_celebrities, SEED_CELEBRITIES

__all__ = [
    "AddressParser", "RegexAddressParser", "ParsedAddress", "parse_address",
    "VisibilityPolicy", "visibility_policy",
    "HandwryttenClient", "FulfillmentResult", "FONT_MAP", "font_for_style",
    "LetterSubmissionService", "SubmissionResult",
    "DirectoryService",
    "ForumService",
    "seed_celebrities", "SEED_CELEBRITIES",
]
