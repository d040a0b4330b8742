"""Strict integer parsing for values scraped from iqdb pages."""

import re

from iqdb.errors import FormatError

# ASCII digits with an optional sign; no whitespace, underscores or other scripts.
_INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)


def parse_int(raw: str, expected: str) -> int:
    """Parse ``raw`` as a plain decimal integer or raise ``FormatError``."""
    if not _INTEGER_RE.fullmatch(raw):
        raise FormatError(raw, expected)
    return int(raw)
