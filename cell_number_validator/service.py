"""Cell number validation combining format checks and line type lookups."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, Iterable, List, Set

from .domain.classifier import LineTypeClassifier
from .domain.models import BatchReport, LineType, NationalNumber, NumberVerdict, Reason
from .exceptions import RemoteServiceError
from .formats import DEFAULT_REGION, inspect_number

logger = logging.getLogger(__name__)


class CellNumberValidator:
    """Decide whether raw inputs are callable NANP mobile numbers.

    Each unique number is looked up at most once per batch. Results are
    sets, so their iteration order is unspecified.
    """

    def __init__(
        self,
        classifier: LineTypeClassifier,
        region: str = DEFAULT_REGION,
        workers: int = 1,
        strict_region: bool = False,
    ) -> None:
        self.classifier = classifier
        self.region = region
        self.workers = max(1, workers)
        self.strict_region = strict_region

    def is_cell_number(self, raw: str) -> bool:
        """Return ``True`` if ``raw`` is a valid mobile number.

        ``RemoteServiceError`` from the lookup propagates to the caller.
        """
        number, _ = inspect_number(raw, self.region, self.strict_region)
        if number is None:
            return False
        return self.classifier.classify(number) is LineType.MOBILE

    def check(self, raw: str) -> NumberVerdict:
        """Return the verdict for ``raw``, capturing lookup failures."""
        number, reason = inspect_number(raw, self.region, self.strict_region)
        if number is None:
            return NumberVerdict(raw=raw, number=None, reason=reason)
        try:
            line_type = self.classifier.classify(number)
        except RemoteServiceError as exc:
            logger.warning("Could not classify %s: %s", number, exc)
            return NumberVerdict(raw=raw, number=number, reason=Reason.LOOKUP_ERROR)
        return _verdict(raw, number, line_type)

    def validate_set(self, raws: Iterable[str]) -> Set[NationalNumber]:
        """Return the mobile numbers found in ``raws``."""
        return self.validate_batch(raws).numbers

    def validate_batch(self, raws: Iterable[str]) -> BatchReport:
        """Validate a batch of raw inputs.

        A failed lookup excludes only the affected number and is counted
        in ``BatchReport.errors``.
        """
        start = time.monotonic()
        report = BatchReport()

        parsed: Dict[str, NationalNumber] = {}
        for raw in set(raws):
            number, reason = inspect_number(raw, self.region, self.strict_region)
            if number is None:
                report.verdicts[raw] = NumberVerdict(raw=raw, number=None, reason=reason)
            else:
                parsed[raw] = number

        unique = list(set(parsed.values()))
        logger.info(
            "Classifying %d unique numbers from %d inputs", len(unique), len(report.verdicts) + len(parsed)
        )
        line_types = self._classify_all(unique)

        for raw, number in parsed.items():
            line_type = line_types.get(number)
            if line_type is None:
                report.verdicts[raw] = NumberVerdict(raw=raw, number=number, reason=Reason.LOOKUP_ERROR)
                continue
            verdict = _verdict(raw, number, line_type)
            report.verdicts[raw] = verdict
            if verdict.is_cell:
                report.numbers.add(number)

        report.errors = len(unique) - len(line_types)
        report.elapsed_ms = int((time.monotonic() - start) * 1000)
        if report.errors:
            logger.warning("%d of %d lookups failed", report.errors, len(unique))
        return report

    def _classify_all(self, numbers: List[NationalNumber]) -> Dict[NationalNumber, LineType]:
        """Classify each number once; failed lookups are left out of the result."""
        if self.workers > 1 and len(numbers) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                outcomes = list(pool.map(self._safe_classify, numbers))
        else:
            outcomes = [self._safe_classify(n) for n in numbers]
        return {n: lt for n, lt in zip(numbers, outcomes) if lt is not None}

    def _safe_classify(self, number: NationalNumber) -> LineType | None:
        try:
            return self.classifier.classify(number)
        except RemoteServiceError as exc:
            logger.warning("Could not classify %s: %s", number, exc)
            return None


def _verdict(raw: str, number: NationalNumber, line_type: LineType) -> NumberVerdict:
    reason = Reason.OK if line_type is LineType.MOBILE else Reason.NOT_MOBILE
    return NumberVerdict(raw=raw, number=number, reason=reason, line_type=line_type)
