import math
from typing import Callable, Optional

from uintnarray import UintNArray, coerce_int


def _relative(index: int, length: int) -> int:
    """Resolve a possibly negative index against ``length`` and clamp it."""
    if index < 0:
        index += length
    return min(max(index, 0), length)


def _is_numeric(value) -> bool:
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError):
        return False


def copy_within(view, target, start=0, end=None):
    """Copy words ``start:end`` of ``view`` to position ``target`` in place.

    Non-numeric ``target``/``start`` count as 0 and a non-numeric ``end``
    as the length; negative ones are relative to the end.
    The copied run is shortened so that it fits between ``target`` and the
    end of the array; an empty run leaves the array untouched.

    :param view: Array to modify.
    :type view: UintNArray
    :param target: Index the first copied word goes to.
    :param start: Index of the first word to copy.
    :param end: Index after the last word to copy, defaults to ``len(view)``.
    :returns: ``view`` itself.
    :rtype: UintNArray
    """
    length = len(view)
    target = _relative(coerce_int(target), length)
    start = _relative(coerce_int(start), length)
    if end is None or not _is_numeric(end):
        end = length
    else:
        end = _relative(coerce_int(end), length)
    if target + end - start > length:
        end = length - target + start
    if end <= start:
        return view

    words = [view.get(i) for i in range(start, end)]
    view.assign(words, target)
    return view


def fill(view, value, start=0, end=None):
    """Set words ``start:end`` of ``view`` to ``value`` (truncated)."""
    length = len(view)
    start = _relative(coerce_int(start), length)
    end = length if end is None else _relative(coerce_int(end), length)
    for i in range(start, end):
        view.set(i, value)
    return view


def index_of(view, value) -> int:
    """Return the first index holding ``value``, or -1."""
    for i, word in enumerate(view):
        if word == value:
            return i
    return -1


def last_index_of(view, value) -> int:
    """Return the last index holding ``value``, or -1."""
    for i in range(len(view) - 1, -1, -1):
        if view.get(i) == value:
            return i
    return -1


def mapped(view, fn: Callable[[int], int]) -> UintNArray:
    return UintNArray(view.signed_width, [fn(word) for word in view])


def filtered(view, predicate: Callable[[int], bool]) -> UintNArray:
    return UintNArray(view.signed_width, [w for w in view if predicate(w)])


def reversed_copy(view) -> UintNArray:
    return UintNArray(view.signed_width, list(view)[::-1])


def sorted_copy(
    view, key: Optional[Callable[[int], object]] = None, reverse=False
) -> UintNArray:
    return UintNArray(
        view.signed_width, sorted(view, key=key, reverse=reverse)
    )
