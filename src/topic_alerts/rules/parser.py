"""Classify raw rule test strings into AlertTest variants."""

from __future__ import annotations

import logging
import re

from .models import AlertTest, TestKind

logger = logging.getLogger("topic-alerts")


def _parse_number(text: str) -> float | None:
    try:
        return float(text)
    except ValueError:
        return None


def parse_test(raw: str) -> AlertTest:
    """Classify a configured test string.

    Priority: ``*`` wildcard, ``<N`` / ``>N`` thresholds, anything that
    compiles as a case-insensitive regular expression, and finally an exact
    string comparison for strings that are not valid patterns.
    """
    if raw == "*":
        return AlertTest.wildcard()

    if raw[:1] in ("<", ">"):
        threshold = _parse_number(raw[1:])
        if threshold is not None:
            kind = TestKind.LESS_THAN if raw[0] == "<" else TestKind.GREATER_THAN
            return AlertTest(kind=kind, raw=raw, threshold=threshold)

    try:
        pattern = re.compile(raw, re.IGNORECASE)
    except re.error as e:
        logger.debug(f"Test {raw!r} is not a regular expression ({e}), using equality")
        return AlertTest.equals(raw)

    return AlertTest(kind=TestKind.REGEX, raw=raw, pattern=pattern)
