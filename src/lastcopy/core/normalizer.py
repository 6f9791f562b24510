"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/normalizer.py
Maps an enumerated filename to its canonical identity.
"""

import re
from functools import lru_cache

# "<base>[ ](<digits>)[.<ext>]", anchored at both ends via fullmatch
_PATTERN_ENUMERATED = re.compile(r'(?P<base>.+?)\s*\(\d+\)(?P<ext>\.\w+)?')


@lru_cache(maxsize=8192)
def normalize_filename(filename: str) -> str:
    """
    Strip the trailing enumeration suffix file managers add on name collisions.

    Rules:
    - The parenthesized number is mandatory, otherwise the name is returned as is
    - Whitespace before the opening bracket is dropped
    - The extension (if any) must follow the closing bracket directly
    - Base must be non-empty: "(3).txt" is left untouched
    - Only the last bracket group counts, earlier ones stay part of the base

    Args:
        filename: Bare filename without directory components

    Returns:
        str: Canonical identity used as the grouping key

    Examples:
        "report (2).pdf" → "report.pdf"
        "report(2).pdf" → "report.pdf"
        "report (12)" → "report"
        "report.pdf" → "report.pdf"
        "(3).txt" → "(3).txt"
        "draft (v1) (4).md" → "draft (v1).md"
    """
    match = _PATTERN_ENUMERATED.fullmatch(filename)
    if match is None:
        return filename
    return match.group('base') + (match.group('ext') or '')
