from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set

import phonenumbers

from ..exceptions import ConfigurationError

OUTPUT_FORMATS = ("E164", "INTERNATIONAL", "NATIONAL", "RFC3966")


class LineType(str, Enum):
    """Line classification returned by the lookup service."""

    MOBILE = "MOBILE"
    LANDLINE = "LANDLINE"
    VOIP = "VOIP"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "LineType":
        """Map a raw service type string to a ``LineType``."""
        if not isinstance(value, str):
            return cls.UNKNOWN
        return _LINE_TYPE_ALIASES.get(value.strip().lower(), cls.UNKNOWN)


_LINE_TYPE_ALIASES = {
    "mobile": LineType.MOBILE,
    "landline": LineType.LANDLINE,
    "fixedline": LineType.LANDLINE,
    "voip": LineType.VOIP,
    "nonfixedvoip": LineType.VOIP,
    "fixedvoip": LineType.VOIP,
}


@dataclass(frozen=True)
class NationalNumber:
    """A parsed number that passed format validation."""

    country_code: int
    national_number: str

    def to_phonenumber(self) -> phonenumbers.PhoneNumber:
        return phonenumbers.PhoneNumber(
            country_code=self.country_code,
            national_number=int(self.national_number),
        )

    def format(self, fmt: str = "E164") -> str:
        """Render the number using a ``phonenumbers.PhoneNumberFormat`` name."""
        if fmt.upper() not in OUTPUT_FORMATS:
            raise ConfigurationError(f"Unknown number format: {fmt}")
        return phonenumbers.format_number(
            self.to_phonenumber(), getattr(phonenumbers.PhoneNumberFormat, fmt.upper())
        )

    def __str__(self) -> str:
        return self.format("E164")


class Reason(str, Enum):
    """Why a raw input was accepted or rejected."""

    OK = "ok"
    UNPARSABLE = "unparsable"
    INVALID = "invalid"
    RESERVED_NXX = "reserved_nxx"
    RESERVED_N11 = "reserved_n11"
    RESERVED_555 = "reserved_555"
    NOT_MOBILE = "not_mobile"
    LOOKUP_ERROR = "lookup_error"


@dataclass
class NumberVerdict:
    """Outcome of checking a single raw input."""
    raw: str
    number: Optional[NationalNumber]
    reason: Reason
    line_type: Optional[LineType] = None

    @property
    def is_cell(self) -> bool:
        return self.reason is Reason.OK


@dataclass
class BatchReport:
    """Aggregated result of a batch validation run."""

    numbers: Set[NationalNumber] = field(default_factory=set)
    verdicts: Dict[str, NumberVerdict] = field(default_factory=dict)
    errors: int = 0
    elapsed_ms: int = 0
