"""Identifier extraction from archive entry paths."""
from __future__ import annotations

import re

from .models import Identifier

_LEADING_DIGITS = re.compile(r"^[0-9]+")


def basename(path: str) -> str:
    return path.rsplit("/", 1)[-1]


def extract_identifier(path: str) -> Identifier | None:
    """Return the leading run of decimal digits of the path's basename.

    ``"a/03_report.txt"`` gives ``"03"``; a basename that does not start with a
    digit gives ``None``. Only ASCII digits count, so full-width or other
    Unicode digits never form an identifier.
    """
    match = _LEADING_DIGITS.match(basename(path))
    return match.group(0) if match else None
