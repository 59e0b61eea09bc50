# factexplorer/facts/sorting.py
import re
from datetime import datetime, timezone
from typing import Any, Callable, List, Sequence, TypeVar, Union

from .types import FactRow, to_comparable_string

T = TypeVar("T", FactRow, dict)

MODIFIED = "modified"
_DIGITS = re.compile(r"(\d+)", re.ASCII)
# fromisoformat before 3.11 only takes 3 or 6 fractional digits
_FRACTION = re.compile(r"(?<=:\d\d)\.(\d+)", re.ASCII)
_DIRECTIONS = {"asc": False, "ascending": False, "desc": True, "descending": True}


def natural_key(s: str) -> List[Union[int, str]]:
    """
    Split a string into text and integer runs: host-2 < host-10.
    Text runs are case-folded. Even positions are always text and odd
    positions always integers, so two keys never compare str with int.
    """
    parts = _DIGITS.split(s)
    return [int(p) if i % 2 else p.casefold() for i, p in enumerate(parts)]


def _six_digit_fraction(m: "re.Match") -> str:
    return "." + m.group(1)[:6].ljust(6, "0")


def timestamp_key(value: Any) -> float:
    """Seconds since the epoch; anything unparseable counts as 0."""
    text = _FRACTION.sub(_six_digit_fraction, str(value).replace("Z", "+00:00"), count=1)
    try:
        dt = datetime.fromisoformat(text)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.timestamp()
    except (ValueError, OverflowError):
        return 0.0


def _getter(key: str) -> Callable[[Any], Any]:
    def _get(item):
        if isinstance(item, dict):
            return item.get(key)
        return getattr(item, key, None)
    return _get


def sort_items(items: Sequence[T], key: str, direction: str = "asc") -> List[T]:
    """
    Return a new list ordered by ``key``.

    Missing/None values go last whichever the direction. The modified column
    compares as timestamps; everything else compares as natural strings.
    The sort is stable, so equal items keep their input order.
    """
    try:
        descending = _DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"unknown sort direction: {direction!r}")

    get = _getter(key)
    present = [i for i in items if get(i) is not None]
    missing = [i for i in items if get(i) is None]

    if key == MODIFIED:
        sort_key = lambda item: timestamp_key(get(item))
    else:
        sort_key = lambda item: natural_key(to_comparable_string(get(item)))

    return sorted(present, key=sort_key, reverse=descending) + missing
