"""Code point parsing and private-use allocation.

Code points cross the external interface as hexadecimal strings ("0041",
"U+E000", "0xe000"). Internally they are plain integers; they are formatted
back as uppercase hex with at least four digits.
"""

import random
import re
from collections.abc import Iterable

from glyphforge.config import CodepointConfig
from glyphforge.exceptions import (
    CodepointRangeExhaustedError,
    DuplicateCodepointError,
    InvalidCodepointError,
)

MAX_CODEPOINT = 0x10FFFF

_PREFIX = re.compile(r"^(?:u\+|0x|&#x)", re.IGNORECASE)
_HEX = re.compile(r"^[0-9a-f]{1,6}$", re.IGNORECASE)


def normalize_codepoint(value: str | int) -> int:
    """Parse a code point given as a hex string or an integer.

    Accepts optional ``U+``, ``0x`` and ``&#x`` prefixes, a trailing ``;``
    and either letter case.

    Raises:
        InvalidCodepointError: If the value is not a hex number in 0..10FFFF
    """
    if isinstance(value, bool):
        raise InvalidCodepointError(str(value))

    if isinstance(value, int):
        codepoint = value
    else:
        text = _PREFIX.sub("", value.strip()).rstrip(";")
        if not _HEX.match(text):
            raise InvalidCodepointError(value)
        codepoint = int(text, 16)

    if not 0 <= codepoint <= MAX_CODEPOINT:
        raise InvalidCodepointError(str(value))
    return codepoint


def format_codepoint(codepoint: int) -> str:
    """Uppercase hex, zero-padded to four digits."""
    return f"{codepoint:04X}"


def _used_set(used: Iterable[str | int]) -> set[int]:
    return {normalize_codepoint(value) for value in used}


def allocate_codepoint(
    used: Iterable[str | int],
    config: CodepointConfig | None = None,
    rng: random.Random | None = None,
) -> int:
    """Pick a free code point from the configured private-use range.

    A bounded number of random draws is tried first; if every draw collides
    the range is scanned from the bottom for the first free value.

    Args:
        used: Code points already present in the font
        config: Range and draw count (defaults to the full BMP PUA)
        rng: Random source, injectable for reproducible allocation

    Returns:
        A code point in range that is not in ``used``

    Raises:
        CodepointRangeExhaustedError: If every value in the range is taken
    """
    config = config or CodepointConfig()
    rng = rng or random.Random()
    taken = _used_set(used)
    start, end = config.range_start, config.range_end

    in_range = sum(1 for cp in taken if start <= cp <= end)
    if in_range >= end - start + 1:
        raise CodepointRangeExhaustedError(start, end)

    for _ in range(config.random_attempts):
        candidate = rng.randint(start, end)
        if candidate not in taken:
            return candidate

    for candidate in range(start, end + 1):
        if candidate not in taken:
            return candidate

    raise CodepointRangeExhaustedError(start, end)


def resolve_codepoint(
    requested: str | int | None,
    used: Iterable[str | int],
    config: CodepointConfig | None = None,
    rng: random.Random | None = None,
) -> int:
    """Validate a caller-supplied code point, or allocate one when absent.

    Raises:
        InvalidCodepointError: If ``requested`` cannot be parsed
        DuplicateCodepointError: If ``requested`` is already used
        CodepointRangeExhaustedError: If allocation finds no free value
    """
    taken = _used_set(used)

    if requested is None or (isinstance(requested, str) and not requested.strip()):
        return allocate_codepoint(taken, config=config, rng=rng)

    codepoint = normalize_codepoint(requested)
    if codepoint in taken:
        raise DuplicateCodepointError(format_codepoint(codepoint))
    return codepoint
