"""US number parsing and North American Numbering Plan exclusions."""

import logging
import re
from typing import Optional, Tuple

import phonenumbers
from phonenumbers import NumberParseException

from .domain.models import NationalNumber, Reason

logger = logging.getLogger(__name__)

DEFAULT_REGION = "US"

# Exchange codes that never belong to an ordinary subscriber line
RESERVED_PATTERNS = (
    ("nxx", re.compile(r"^[2-9]\d{2}1\d{2}\d{4}$")),
    ("n11", re.compile(r"^[2-9]\d{2}[2-9]11\d{4}$")),
    ("555", re.compile(r"^[2-9]\d{2}555\d{4}$")),
)

_RESERVED_REASONS = {
    "nxx": Reason.RESERVED_NXX,
    "n11": Reason.RESERVED_N11,
    "555": Reason.RESERVED_555,
}


def reserved_pattern(digits: str) -> Optional[str]:
    """Return the name of the reserved pattern ``digits`` matches, if any."""
    for name, pattern in RESERVED_PATTERNS:
        if pattern.match(digits):
            return name
    return None


def inspect_number(
    raw: str,
    region: str = DEFAULT_REGION,
    strict_region: bool = False,
) -> Tuple[Optional[NationalNumber], Reason]:
    """Parse ``raw`` and explain the outcome.

    Returns the parsed number with ``Reason.OK``, or ``None`` with the
    reason it was rejected. Validity is checked against the number's own
    region, so other NANP countries pass; with ``strict_region`` only
    numbers valid for ``region`` are accepted.
    """
    try:
        parsed = phonenumbers.parse(raw, region)
    except NumberParseException as exc:
        logger.debug("Cannot parse %r: %s", raw, exc)
        return None, Reason.UNPARSABLE

    digits = str(parsed.national_number)
    name = reserved_pattern(digits)
    if name:
        return None, _RESERVED_REASONS[name]

    if strict_region:
        valid = phonenumbers.is_valid_number_for_region(parsed, region)
    else:
        valid = phonenumbers.is_valid_number(parsed)
    if not valid:
        return None, Reason.INVALID

    return NationalNumber(country_code=parsed.country_code, national_number=digits), Reason.OK


def parse_national_number(
    raw: str,
    region: str = DEFAULT_REGION,
    strict_region: bool = False,
) -> Optional[NationalNumber]:
    """Return the validated national number for ``raw`` or ``None``."""
    number, _ = inspect_number(raw, region, strict_region)
    return number
