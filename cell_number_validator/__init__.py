from .domain.models import BatchReport, LineType, NationalNumber, NumberVerdict, Reason
from .domain.classifier import LineTypeClassifier
from .exceptions import CellValidatorError, ConfigurationError, RemoteServiceError
from .formats import parse_national_number, reserved_pattern
from .service import CellNumberValidator

__all__ = [
    "BatchReport",
    "LineType",
    "NationalNumber",
    "NumberVerdict",
    "Reason",
    "LineTypeClassifier",
    "CellValidatorError",
    "ConfigurationError",
    "RemoteServiceError",
    "parse_national_number",
    "reserved_pattern",
    "CellNumberValidator",
]
