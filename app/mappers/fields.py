"""Validated request fields.

A field is read only through ``ValidatedField.resolve()``: an unset raw value
yields the field's default, a set value goes through the field's rule, which
returns the accepted value or ``None`` (absent).
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar

T = TypeVar("T")

_INT_RE = re.compile(r"[+-]?\d+")
_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
_NUMBER_RE = re.compile(_NUMBER)
_LEADING_NUMBER_RE = re.compile(r"\s*(" + _NUMBER + ")")


@dataclass(frozen=True, slots=True)
class ValidatedField(Generic[T]):
    raw: Any
    rule: Callable[[Any], T | None]
    default: T | None = None
    invalid_as_default: bool = False

    def resolve(self) -> T | None:
        if self.raw is None:
            return self.default
        value = self.rule(self.raw)
        if value is None and self.invalid_as_default:
            return self.default
        return value


def parse_int(raw: Any) -> int | None:
    """Strict integer: "20" and " 20 " pass, "20.5", "2e1" and "abc" do not."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    text = str(raw).strip()
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def leading_int(raw: Any) -> int:
    """Lenient integer: leading digits of the value, 0 when there are none."""
    if isinstance(raw, int) and not isinstance(raw, bool):
        return raw
    match = _LEADING_INT_RE.match(str(raw))
    return int(match.group(1)) if match else 0


def parse_number(raw: Any) -> float | None:
    """Strict decimal number: "100", " 100.0", "1e2" pass, "100abc" and "1_00" do not."""
    text = str(raw).strip()
    if not _NUMBER_RE.fullmatch(text):
        return None
    value = float(text)
    return value if math.isfinite(value) else None


def leading_float(raw: Any) -> float | None:
    """Lenient float: numeric prefix of the value ("12abc" -> 12.0), 0.0 when there is none.

    None when the prefix overflows to infinity.
    """
    match = _LEADING_NUMBER_RE.match(str(raw))
    if not match:
        return 0.0
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def int_in_range(minimum: int, maximum: int | None = None) -> Callable[[Any], int | None]:
    def rule(raw: Any) -> int | None:
        value = parse_int(raw)
        if value is None or value < minimum:
            return None
        if maximum is not None and value > maximum:
            return None
        return value

    return rule


def one_of(allowed: Iterable[str]) -> Callable[[Any], str | None]:
    """Case-insensitive membership; the value keeps its original casing."""
    folded = {a.casefold() for a in allowed}

    def rule(raw: Any) -> str | None:
        value = str(raw)
        return value if value.casefold() in folded else None

    return rule


def subset_of(allowed: Iterable[str]) -> Callable[[Any], list[str] | None]:
    """Keep the entries that pass ``one_of``; no survivors means absent."""
    member = one_of(allowed)

    def rule(raw: Any) -> list[str] | None:
        kept = [value for value in (member(item) for item in raw) if value is not None]
        return kept or None

    return rule
