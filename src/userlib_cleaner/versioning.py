"""Approximate version-string ordering."""

from __future__ import annotations

import re

VERSION_FACTOR = 1000
_DIGIT_RUN_RE = re.compile(r"[0-9]+")


def normalize_version(version: str) -> int:
    """Fold every run of digits in ``version`` into one comparable integer.

    Runs are read left to right; once the accumulator is non-zero it is
    shifted by ``VERSION_FACTOR`` before the next run is added, so
    ``"1.2.3"`` becomes ``1002003`` and ``"4.11"`` becomes ``4011``. Anything
    that is not a digit (separators, qualifiers like ``SNAPSHOT``) is ignored
    and a string without digits maps to ``0``.

    This is not a semantic-version comparator: components of 1000 or more
    overlap the next slot, and leading ``0`` components do not shift.
    """

    number = 0
    for run in _DIGIT_RUN_RE.findall(version or ""):
        if number > 0:
            number *= VERSION_FACTOR
        number += int(run)
    return number
