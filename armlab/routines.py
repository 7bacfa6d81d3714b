"""Small integer and string routines with 32-bit signed int semantics.

Arithmetic wraps around like a 32-bit two's-complement ``int``.  Routines
that work on sequences return new lists instead of changing their input.
"""

from __future__ import annotations

from typing import Iterable, Sequence

_UINT32_MASK = 0xFFFFFFFF
_STRIDE = 4


def _int32(value: int) -> int:
    value &= _UINT32_MASK
    return value - (1 << 32) if value & 0x80000000 else value


def _midpoint(i: int, j: int) -> int:
    total = i + j
    half = abs(total) // 2
    return half if total >= 0 else -half


def add(a0: int, a1: int) -> int:
    """Sum of two ints."""
    return _int32(a0 + a1)


def add4(a0: int, a1: int, a2: int, a3: int) -> int:
    """Sum of four ints, added as two pairs."""
    return add(add(a0, a1), add(a2, a3))


def mul3(a0: int, a1: int, a2: int) -> int:
    """Product of three ints."""
    return _int32(a0 * a1 * a2)


def quadratic(x: int, a: int, b: int, c: int) -> int:
    """Value of ``a*x*x + b*x + c``."""
    return _int32(a * x * x + b * x + c)


def minimum(a: int, b: int) -> int:
    """The smaller of two ints."""
    return a if a < b else b


def _max2(v0: int, v1: int) -> int:
    return v0 if v0 > v1 else v1


def max3(v0: int, v1: int, v2: int) -> int:
    """The largest of three ints."""
    return _max2(_max2(v0, v1), v2)


def fact(n: int) -> int:
    """Factorial of ``n``; negative ``n`` has no factorial."""
    if n < 0:
        raise ValueError(f"factorial of a negative number: {n}")
    result = 1
    for k in range(1, n + 1):
        result = _int32(result * k)
    return result


def fib_rec(n: int) -> int:
    """The ``n``-th Fibonacci number, defined by the two-term recurrence."""
    if n < 0:
        raise ValueError(f"Fibonacci number of a negative index: {n}")
    previous, current = 0, 1
    for _ in range(n):
        previous, current = current, _int32(previous + current)
    return previous


def fib_iter(n: int) -> int:
    """The ``n``-th Fibonacci number, computed by counting upwards.

    Any index below 1 other than 0 yields 1, as the loop never runs.
    """
    if n == 0:
        return 0
    previous, current = 0, 1
    for _ in range(1, n):
        previous, current = current, _int32(previous + current)
    return current


def find_max(values: Sequence[int]) -> int:
    """Largest value of a non-empty sequence."""
    if not values:
        raise ValueError("find_max of an empty sequence")
    iterator = iter(values)
    best = next(iterator)
    for value in iterator:
        if value > best:
            best = value
    return best


def sum_array(values: Iterable[int]) -> int:
    """Sum of all values."""
    total = 0
    for value in values:
        total = _int32(total + value)
    return total


def sum_strided(values: Sequence[int], count: int) -> int:
    """Sum of ``count`` values taken at every fourth position."""
    picked = list(values[::_STRIDE])
    if count > len(picked):
        raise IndexError(
            f"{count} strided values requested, only {len(picked)} available"
        )
    return sum_array(picked[: max(count, 0)])


def string_length(s: str) -> int:
    """Length of ``s`` up to the first NUL character."""
    end = s.find("\0")
    return len(s) if end < 0 else end


_LOWER_TABLE = str.maketrans(
    {chr(code): chr(code + 32) for code in range(ord("A"), ord("Z") + 1)}
)


def stolower(s: str) -> str:
    """``s`` with ASCII capitals ``A``-``Z`` turned to lower case."""
    return s.translate(_LOWER_TABLE)


def is_three_or_seven(a: int) -> bool:
    """True if ``a`` is 3 or 7."""
    return a in (3, 7)


def _find_from(s1: str, s2: str, start: int) -> int | None:
    for pos in range(start, len(s1)):
        if s1.startswith(s2, pos):
            return pos
    return None


def substr(s1: str, s2: str) -> int | None:
    """Index of the first occurrence of ``s2`` in ``s1``, or None.

    An empty ``s1`` contains nothing, not even the empty string.
    """
    return _find_from(s1, s2, 0)


def matches(s1: str, s2: str) -> int:
    """Number of occurrences of ``s2`` in ``s1``, overlaps included."""
    count = 0
    pos = 0
    while pos < len(s1):
        found = _find_from(s1, s2, pos)
        if found is None:
            break
        count += 1
        pos = found + 1
    return count


def _check_range(values: Sequence[int], i: int, j: int) -> None:
    if i <= j and (i < 0 or j >= len(values)):
        raise IndexError(f"range [{i}, {j}] outside a sequence of {len(values)}")


def _merge_in_place(a: list[int], i: int, j: int) -> None:
    mid = _midpoint(i, j)
    left = a[i : mid + 1]
    right = a[mid + 1 : j + 1]
    merged: list[int] = []
    li = ri = 0
    while li < len(left) and ri < len(right):
        if left[li] < right[ri]:
            merged.append(left[li])
            li += 1
        else:
            merged.append(right[ri])
            ri += 1
    merged.extend(left[li:])
    merged.extend(right[ri:])
    if i <= j:
        a[i : j + 1] = merged


def merge(values: Sequence[int], i: int, j: int) -> list[int]:
    """Merge the sorted runs ``[i, mid]`` and ``[mid+1, j]`` of ``values``."""
    _check_range(values, i, j)
    result = list(values)
    _merge_in_place(result, i, j)
    return result


def _merge_sort_in_place(a: list[int], i: int, j: int) -> None:
    if j <= i:
        return
    mid = _midpoint(i, j)
    _merge_sort_in_place(a, i, mid)
    _merge_sort_in_place(a, mid + 1, j)
    _merge_in_place(a, i, j)


def merge_sort(values: Sequence[int], i: int, j: int) -> list[int]:
    """Copy of ``values`` with the section ``[i, j]`` sorted by merge sort."""
    _check_range(values, i, j)
    result = list(values)
    _merge_sort_in_place(result, i, j)
    return result


def smult(values: Iterable[int], s: int) -> list[int]:
    """Every value multiplied by the scalar ``s``."""
    return [_int32(value * s) for value in values]


def format_array(values: Iterable[int]) -> str:
    """Render values as ``[a,b,c]``."""
    return "[" + ",".join(str(value) for value in values) + "]"