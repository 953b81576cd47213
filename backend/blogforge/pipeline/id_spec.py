"""
Identifier Spec Parser
======================

Turns the command-line id argument into the ordered list of source ids.

Accepted forms (checked in this order):
  - range: "10-20"   -> 10, 11, ..., 20 (inclusive)
  - list:  "5,7,9"   -> 5, 7, 9 (input order, repeats kept)
"""

from __future__ import annotations

import re
from typing import List

_DIGITS = re.compile(r"[0-9]+")

USAGE = "Use a range (e.g., 10-20) or a list (e.g., 5,7,9)"


class InvalidSpecError(ValueError):
    """Raised when an id spec matches neither the range nor the list form."""


def _to_id(token: str, spec: str) -> int:
    token = token.strip()
    if not _DIGITS.fullmatch(token):
        raise InvalidSpecError(f"Invalid ID {token!r} in {spec!r}. {USAGE}")
    value = int(token)
    if value < 1:
        raise InvalidSpecError(f"IDs must be positive, got {value} in {spec!r}")
    return value


def parse_id_spec(spec: str) -> List[int]:
    """
    Parse an id spec string.

    Raises:
        InvalidSpecError: on anything that is not a well-formed range or list
    """
    if not isinstance(spec, str) or not spec.strip():
        raise InvalidSpecError(f"Empty ID spec. {USAGE}")

    if "-" in spec:
        parts = spec.split("-")
        if len(parts) != 2:
            raise InvalidSpecError(f"Invalid ID range {spec!r}. {USAGE}")
        low, high = (_to_id(p, spec) for p in parts)
        if high < low:
            raise InvalidSpecError(f"Invalid ID range {spec!r}: end is below start")
        return list(range(low, high + 1))

    if "," in spec:
        return [_to_id(p, spec) for p in spec.split(",")]

    raise InvalidSpecError(f"Invalid ID format {spec!r}. {USAGE}")
