"""
Celebrity Penpal - Address Parser

Splits a free-form, newline-separated mailing address into the structured
recipient block the fulfillment provider expects.

Layout assumed:
    line 0          recipient name
    line 1          address line 1
    line 2          address line 2 (only when it is not the last line)
    last line       "City, ST 12345" (each part optional)

This is a best-effort heuristic, not a postal grammar. Lines between
address line 2 and the last line are dropped, and any field may come back
empty. Country is always the default unless a caller overrides it.
"""
from __future__ import annotations
import re
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional

from ..errors import InvalidAddressError


DEFAULT_COUNTRY = "US"

# "Springfield, IL 62704" / "Nashville, TN 37204-3923" / ", NY" / "Bangor,"
CITY_STATE_ZIP_RE = re.compile(
    r"^(?P<city>[^,]*),\s*(?:(?P<state>[A-Za-z]{2})\b)?\s*(?P<zip>\d{5}(?:-\d{4})?)?"
)


@dataclass
class ParsedAddress:
    """Structured address. Never persisted."""
    name: str
    address1: str
    address2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = DEFAULT_COUNTRY

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class AddressParser:
    """Strategy interface. Swap in a stricter validator without touching callers."""

    def parse(self, raw: Optional[str], country: Optional[str] = None) -> ParsedAddress:
        raise NotImplementedError


class RegexAddressParser(AddressParser):
    """Default line-position + regex heuristic."""

    def parse(self, raw: Optional[str], country: Optional[str] = None) -> ParsedAddress:
        lines = _clean_lines(raw)
        if len(lines) < 2:
            raise InvalidAddressError()

        last = lines[-1]
        address2 = lines[2] if len(lines) > 3 else ""

        city, state, zip_code = "", "", ""
        match = CITY_STATE_ZIP_RE.match(last)
        if match:
            city = (match.group("city") or "").strip()
            state = (match.group("state") or "").upper()
            zip_code = match.group("zip") or ""

        return ParsedAddress(
            name=lines[0],
            address1=lines[1],
            address2=address2,
            city=city,
            state=state,
            zip=zip_code,
            country=country or DEFAULT_COUNTRY,
        )


def _clean_lines(raw: Optional[str]) -> List[str]:
    """Trim every line and drop the blank ones."""
    if not raw:
        return []
    return [line.strip() for line in raw.splitlines() if line.strip()]


default_parser = RegexAddressParser()


def parse_address(raw: Optional[str], country: Optional[str] = None) -> ParsedAddress:
    """Parse with the default strategy."""
    return default_parser.parse(raw, country=country)
