"""Short hexadecimal labels for identifiers."""

from __future__ import annotations


def pretty(value: int, width: int = 3) -> str:
    """Show the last ``width`` hex digits of ``value``, zero-padded.

    A non-positive ``width`` shows every digit.
    """
    if width > 0:
        return format(value % (16**width), f"0{width}x")
    return format(value, "x")