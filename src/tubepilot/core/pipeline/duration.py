"""Parsing of the platform's compact ISO-8601 duration encoding."""

from __future__ import annotations

import re

DURATION_PATTERN = re.compile(
    r"P(?:(?P<days>\d+)D)?"
    r"(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?"
)


def parse_duration_ms(duration: str | None) -> int:
    """Convert a duration such as ``PT1H2M3S`` to milliseconds.

    Absent or malformed input yields 0, the value for an unknown duration.
    Missing components count as zero.

    >>> parse_duration_ms("PT1H2M3S")
    3723000
    >>> parse_duration_ms("PT5M")
    300000
    >>> parse_duration_ms("")
    0
    """
    if not duration:
        return 0

    match = DURATION_PATTERN.fullmatch(duration.strip())
    if not match:
        return 0

    parts = {name: int(value) for name, value in match.groupdict(default="0").items()}
    total_seconds = (
        parts["days"] * 86400 + parts["hours"] * 3600 + parts["minutes"] * 60 + parts["seconds"]
    )
    return total_seconds * 1000
