from .models import BatchReport, LineType, NationalNumber, NumberVerdict, Reason
from .classifier import LineTypeClassifier

__all__ = [
    "BatchReport",
    "LineType",
    "NationalNumber",
    "NumberVerdict",
    "Reason",
    "LineTypeClassifier",
]
