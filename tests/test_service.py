import pytest

from cell_number_validator.domain.models import LineType, NationalNumber, Reason
from cell_number_validator.exceptions import RemoteServiceError
from cell_number_validator.service import CellNumberValidator
from tests.mocks import FakeClassifier, failing


def nn(digits: str) -> NationalNumber:
    return NationalNumber(country_code=1, national_number=digits)


def test_reserved_number_never_looked_up():
    classifier = FakeClassifier(default=LineType.MOBILE)
    validator = CellNumberValidator(classifier)
    assert validator.is_cell_number("2125551234") is False
    assert classifier.calls == []


def test_mobile_number_is_cell():
    classifier = FakeClassifier({"2024561111": LineType.MOBILE})
    validator = CellNumberValidator(classifier)
    assert validator.is_cell_number("2024561111") is True
    assert validator.validate_set({"2024561111"}) == {nn("2024561111")}


def test_landline_number_is_not_cell():
    classifier = FakeClassifier({"2024561111": LineType.LANDLINE})
    validator = CellNumberValidator(classifier)
    assert validator.is_cell_number("2024561111") is False
    assert validator.validate_set({"2024561111"}) == set()


def test_is_cell_number_propagates_remote_error():
    validator = CellNumberValidator(FakeClassifier({"2024561111": failing()}))
    with pytest.raises(RemoteServiceError):
        validator.is_cell_number("2024561111")


def test_equivalent_spellings_looked_up_once():
    classifier = FakeClassifier({"2024561111": LineType.MOBILE})
    validator = CellNumberValidator(classifier)
    result = validator.validate_set({"202-456-1111", "2024561111", "(202) 456-1111", "+1 202 456 1111"})
    assert result == {nn("2024561111")}
    assert classifier.calls == ["2024561111"]


def test_validate_set_is_idempotent():
    answers = {
        "2024561111": LineType.MOBILE,
        "6502530000": LineType.VOIP,
        "2128675309": LineType.MOBILE,
    }
    validator = CellNumberValidator(FakeClassifier(answers))
    raws = {"2024561111", "6502530000", "212-867-5309", "8005551234", "junk"}
    first = validator.validate_set(raws)
    assert first == validator.validate_set(raws)
    assert first == {nn("2024561111"), nn("2128675309")}


def test_remote_error_isolated_to_one_number():
    answers = {
        "2024561111": LineType.MOBILE,
        "6502530000": failing(),
        "2128675309": LineType.MOBILE,
    }
    validator = CellNumberValidator(FakeClassifier(answers))
    report = validator.validate_batch(["2024561111", "6502530000", "2128675309"])
    assert report.numbers == {nn("2024561111"), nn("2128675309")}
    assert report.errors == 1
    assert report.verdicts["6502530000"].reason is Reason.LOOKUP_ERROR


def test_batch_verdicts():
    answers = {"2024561111": LineType.MOBILE, "6502530000": LineType.LANDLINE}
    validator = CellNumberValidator(FakeClassifier(answers))
    report = validator.validate_batch(["2024561111", "6502530000", "2125551234", "abc"])
    reasons = {raw: v.reason for raw, v in report.verdicts.items()}
    assert reasons == {
        "2024561111": Reason.OK,
        "6502530000": Reason.NOT_MOBILE,
        "2125551234": Reason.RESERVED_555,
        "abc": Reason.UNPARSABLE,
    }
    assert report.verdicts["6502530000"].line_type is LineType.LANDLINE
    assert report.errors == 0
    assert report.elapsed_ms >= 0


def test_check_captures_remote_error():
    validator = CellNumberValidator(FakeClassifier({"2024561111": failing()}))
    verdict = validator.check("2024561111")
    assert verdict.reason is Reason.LOOKUP_ERROR
    assert verdict.number == nn("2024561111")


def test_parallel_lookups_match_sequential():
    answers = {
        "2024561111": LineType.MOBILE,
        "6502530000": LineType.MOBILE,
        "2128675309": LineType.LANDLINE,
        "3128675309": failing(),
        "4158675309": LineType.MOBILE,
    }
    raws = ["2024561111", "650-253-0000", "6502530000", "2128675309", "3128675309", "4158675309"]

    sequential = CellNumberValidator(FakeClassifier(answers)).validate_batch(raws)
    classifier = FakeClassifier(answers)
    parallel = CellNumberValidator(classifier, workers=4).validate_batch(raws)

    assert parallel.numbers == sequential.numbers == {
        nn("2024561111"),
        nn("6502530000"),
        nn("4158675309"),
    }
    assert parallel.errors == sequential.errors == 1
    assert sorted(classifier.calls) == sorted(set(classifier.calls))
    assert len(classifier.calls) == 5


def test_other_nanp_country_looked_up():
    classifier = FakeClassifier({"6042531234": LineType.MOBILE})
    assert CellNumberValidator(classifier).validate_set({"604-253-1234"}) == {nn("6042531234")}
    assert classifier.calls == ["6042531234"]


def test_strict_region_skips_other_nanp_country():
    classifier = FakeClassifier({"6042531234": LineType.MOBILE})
    validator = CellNumberValidator(classifier, strict_region=True)
    report = validator.validate_batch({"6042531234"})
    assert report.numbers == set()
    assert report.verdicts["6042531234"].reason is Reason.INVALID
    assert classifier.calls == []
