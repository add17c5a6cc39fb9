"""Attribute scanning for component opening tags."""

from __future__ import annotations

import re
from typing import Optional


_ATTR_PATTERN = re.compile(
    r"([A-Za-z_][\w-]*)"
    r"(?:\s*=\s*(?:\"([^\"]*)\"|'([^']*)'|\{([^{}]*)\}))?"
)
_TRUE_VALUES = frozenset(("true", "1", "yes"))


class Attributes:
    """Read-only view over the ``key="value"`` pairs of one tag.

    Absent keys never raise; every getter takes the default to fall back to.
    """

    def __init__(self, values: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Attributes):
            return self._values == other._values
        if isinstance(other, dict):
            return self._values == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"Attributes({self._values!r})"

    def get_str(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        return default if value is None else value

    def get_optional(self, *keys: str) -> Optional[str]:
        """First non-blank value among ``keys``, else None."""
        for key in keys:
            value = self._values.get(key)
            if value is not None and value.strip():
                return value
        return None

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self._values.get(key)
        if value is None:
            return default
        return value.strip().lower() in _TRUE_VALUES

    def get_int(self, key: str, default: int) -> int:
        value = self._values.get(key)
        if value is None:
            return default
        try:
            return int(value.strip())
        except ValueError:
            return default


def scan_attributes(attr_text: str) -> Attributes:
    """Extract attributes from the inside of an opening tag.

    Accepts ``key="v"``, ``key='v'``, ``key={v}`` and bare ``key`` (meaning
    ``"true"``). The first occurrence of a key wins.
    """
    values: dict[str, str] = {}
    for match in _ATTR_PATTERN.finditer(attr_text or ""):
        key = match.group(1)
        if key in values:
            continue
        quoted, single, braced = match.group(2), match.group(3), match.group(4)
        if quoted is not None:
            values[key] = quoted
        elif single is not None:
            values[key] = single
        elif braced is not None:
            values[key] = _unwrap_expression(braced)
        else:
            values[key] = "true"
    return Attributes(values)


def _unwrap_expression(expr: str) -> str:
    value = expr.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'`":
        return value[1:-1]
    return value
