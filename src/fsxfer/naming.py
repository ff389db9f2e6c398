"""Name sequencing and name validation helpers.

    When a destination name is taken, a new candidate is built by appending
    or incrementing a parenthesized number::

        foo       -> foo(2)
        foo(2)    -> foo(3)
        foo(9)    -> foo(10)
        foo(a)    -> foo(a)(2)

    Files are sequenced on their name without the extension, so ``data.txt``
    becomes ``data(2).txt`` and then ``data(3).txt``. Folders are sequenced on
    their full name.
"""
import re
import typing as t

from fsxfer.exc import InvalidArgumentError


_NUMBER_SPLIT = re.compile(r'(\d+)')


def next_name(current: str) -> str:
    """Get the next disambiguated name after current."""
    if len(current) < 2 or current[-1] != ')' or not current[-2].isdecimal():
        return current + "(2)"
    open_idx = len(current) - 2
    while open_idx >= 0 and current[open_idx].isdecimal():
        open_idx -= 1
    # The digits must be wrapped in a (...) group to count as a sequence number
    if open_idx < 0 or current[open_idx] != '(':
        return current + "(2)"
    number = int(current[open_idx + 1:-1])
    return f"{current[:open_idx]}({number + 1})"


def split_extension(name: str) -> tuple[str, str]:
    """Split a file name into its pure name and its extension (including the dot)."""
    idx = name.rfind('.')
    if idx < 0:
        return name, ''
    return name[:idx], name[idx:]


def next_item_name(name: str, is_file: bool) -> str:
    """Get the next name for a file (extension preserved) or a folder."""
    if is_file:
        pure_name, extension = split_extension(name)
        return next_name(pure_name) + extension
    return next_name(name)


def check_name_segment(name: str, invalid_chars: t.Iterable[str]):
    """Ensure that name can be used as a single path segment."""
    if name is None or name.strip() == "":
        raise InvalidArgumentError("Name cannot be blank", 1001)
    if name in ('.', '..'):
        raise InvalidArgumentError(f"Name [{name}] is reserved", 1002)
    for ch in invalid_chars:
        if ch in name:
            raise InvalidArgumentError(f"Name contains invalid character: {ch!r}", 1003)


def natural_sort_key(value: str) -> tuple:
    """Sort key that orders embedded numbers by value (file2 before file10)."""
    parts = _NUMBER_SPLIT.split(value)
    return tuple(int(p) if i % 2 else p.casefold() for i, p in enumerate(parts)), value
