"""Version parsing and RPM-style version ordering.

Versions are plain strings. Two versions are equal when their strings are
equal; whether one is newer than the other is decided only by
:func:`compare`, which mimics ``rpmvercmp`` from libalpm.
"""

import re
import string
import typing

VERSION_PATTERN = re.compile(r'[\w.]+', re.ASCII)

_DIGITS = frozenset(string.digits)
_LETTERS = frozenset(string.ascii_letters)


def _is_digit(char: str) -> bool:
    return char in _DIGITS


def _is_alpha(char: str) -> bool:
    return char in _LETTERS


def _is_alnum(char: str) -> bool:
    return char in _DIGITS or char in _LETTERS


def _skip(
    value: str, position: int, predicate: typing.Callable[[str], bool]
) -> int:
    """Return the first position at or after ``position`` failing
    ``predicate``."""
    while position < len(value) and predicate(value[position]):
        position += 1
    return position


def _compare_segments(a: str, b: str, numeric: bool) -> int:
    if numeric:
        a, b = a.lstrip('0'), b.lstrip('0')
        # Without leading zeros the longer number is always the bigger one
        if len(a) != len(b):
            return 1 if len(a) > len(b) else -1
    if a == b:
        return 0
    return 1 if a > b else -1


def compare(a: str, b: str) -> int:
    """Compare two version strings.

    Returns:
        1 if ``a`` is newer than ``b``, 0 if they are the same version,
        -1 if ``b`` is newer than ``a``.

    """
    if a == b:
        return 0

    a_start = b_start = a_end = b_end = 0

    while a_start < len(a) and b_start < len(b):
        a_start = _skip(a, a_start, lambda char: not _is_alnum(char))
        b_start = _skip(b, b_start, lambda char: not _is_alnum(char))

        if a_start >= len(a) or b_start >= len(b):
            break

        # a_end and b_end still point at the end of the previous segment
        a_separator, b_separator = a_start - a_end, b_start - b_end
        if a_separator != b_separator:
            return -1 if a_separator < b_separator else 1

        numeric = _is_digit(a[a_start])
        predicate = _is_digit if numeric else _is_alpha
        a_end = _skip(a, a_start, predicate)
        b_end = _skip(b, b_start, predicate)

        # Segments of a different kind, the numeric one wins
        if b_end == b_start:
            return 1 if numeric else -1

        result = _compare_segments(
            a[a_start:a_end], b[b_start:b_end], numeric
        )
        if result:
            return result

        a_start, b_start = a_end, b_end

    if a_start >= len(a) and b_start >= len(b):
        return 0

    # A remaining alpha segment never beats an empty remainder, while a
    # remaining numeric one always does.
    if (a_start >= len(a) and not _is_alpha(b[b_start])) or (
        a_start < len(a) and _is_alpha(a[a_start])
    ):
        return -1
    return 1


class Version(str):
    """A version string ordered with :func:`compare`.

    Equality and hashing are those of the underlying string, so ``1.0`` and
    ``1.00`` are different values even though neither is newer.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f'Version({str.__repr__(self)})'

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, str):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, str):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, str):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, str):
            return NotImplemented
        return compare(self, other) >= 0

    def __eq__(self, other: object) -> bool:
        return str.__eq__(self, other)

    def __hash__(self) -> int:
        return str.__hash__(self)


def parse(raw: str | None) -> Version | None:
    """Interpret a raw upstream string as a version.

    The string has to contain at least one digit and consist only of word
    characters and dots. A leading ``v`` is dropped, so ``v1.2.3`` becomes
    ``1.2.3``.

    Returns:
        The parsed version, or ``None`` if the string is not a version

    """
    if not raw or not any(_is_digit(char) for char in raw):
        return None
    if not VERSION_PATTERN.fullmatch(raw):
        return None
    return Version(raw.removeprefix('v'))
