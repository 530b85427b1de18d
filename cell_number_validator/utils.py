from pathlib import Path
from typing import Iterable, TextIO

from .domain.models import NationalNumber


def read_phone_list(path: Path) -> set[str]:
    """Read the unique raw phone numbers from a text file, one per line.

    Undecodable bytes are replaced, so a damaged line only fails parsing.
    """
    with path.open(encoding="utf-8", errors="replace") as f:
        return {line.strip() for line in f if line.strip()}


def write_numbers(out: TextIO, numbers: Iterable[NationalNumber], fmt: str = "E164") -> int:
    """Write formatted numbers to ``out``, one per line.

    Returns the number of lines written.
    """
    lines = sorted(n.format(fmt) for n in numbers)
    for line in lines:
        out.write(line + "\n")
    return len(lines)
