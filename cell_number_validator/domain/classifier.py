from abc import ABC, abstractmethod

from .models import LineType, NationalNumber


class LineTypeClassifier(ABC):
    """Abstract interface for line type lookups."""

    @abstractmethod
    def classify(self, number: NationalNumber) -> LineType:
        """Return the line type of ``number``.

        Implementations raise ``RemoteServiceError`` when the lookup
        cannot complete.
        """
