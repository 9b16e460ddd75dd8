"""Range expressions over ordered verses or paragraphs.

Three lexical forms, tried in this order:

- ``first:k`` / ``last:k`` -- the first or last ``k`` units
- ``a-b``                  -- units whose position lies in [a, b]
- ``n``                    -- the unit at position ``n``

The same resolver serves scripture verses and talk paragraphs; it only
relies on the ``position`` of an :class:`AddressableUnit`.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import TypeVar

from gospel_library_mcp.errors import InvalidRangeFormat
from gospel_library_mcp.models import AddressableUnit

U = TypeVar("U", bound=AddressableUnit)

# ASCII digits only; int() would also accept "+", spaces and underscores
_NUMBER = re.compile(r"[0-9]+")
# Relative counts may be negative; they select nothing
_COUNT = re.compile(r"-?[0-9]+")


def _parse_number(
    value: str, expression: str, kind: str, pattern: re.Pattern[str] = _NUMBER
) -> int:
    if not pattern.fullmatch(value):
        raise InvalidRangeFormat(expression, kind)
    return int(value)


def resolve_range(
    expression: str, units: Sequence[U], kind: str = "range"
) -> list[U]:
    """Return the units selected by ``expression``, in their original order.

    An empty result is a success: ``first:0``, ``last:-2``, ``5-3`` and a
    position that does not exist all select nothing. Only an unparseable
    expression raises :class:`InvalidRangeFormat`.
    """
    if ":" in expression:
        anchor, _, count_str = expression.partition(":")
        count = _parse_number(count_str, expression, kind, _COUNT)
        if anchor == "first":
            return list(units[:count]) if count > 0 else []
        if anchor == "last":
            return list(units[-count:]) if count > 0 else []
        raise InvalidRangeFormat(expression, kind)

    if "-" in expression:
        start_str, _, end_str = expression.partition("-")
        start = _parse_number(start_str, expression, kind)
        end = _parse_number(end_str, expression, kind)
        return [u for u in units if start <= u.position <= end]

    n = _parse_number(expression, expression, kind)
    return [u for u in units if u.position == n]
