"""Integer literals as written in module and dropbox files.

C-style radix detection: ``0x1A`` is hex, ``017`` is octal, ``0`` is zero and
anything else is decimal. Values must fit in an unsigned 32-bit integer.
"""

from __future__ import annotations

import string

from nmm.errors import ParseIntError

U32_MAX = 0xFFFFFFFF

_DIGITS = {
    8: frozenset(string.octdigits),
    10: frozenset(string.digits),
    16: frozenset(string.hexdigits),
}


def parse_radix(digits: str, base: int) -> int:
    """Parse ``digits`` in ``base`` as an unsigned 32-bit value.

    A single leading ``+`` is allowed; signs, whitespace, underscores and
    prefixes are otherwise rejected.
    """
    body = digits[1:] if digits.startswith("+") else digits
    try:
        if not body:
            raise ValueError("cannot parse integer from empty string")
        bad = [ch for ch in body if ch not in _DIGITS[base]]
        if bad:
            raise ValueError(f"invalid digit {bad[0]!r} for base {base} in {digits!r}")
        value = int(body, base)
        if value > U32_MAX:
            raise ValueError(f"{digits!r} does not fit in 32 bits")
    except ValueError as err:
        raise ParseIntError(err) from err
    return value


def parse_int(token: str) -> int:
    if token.startswith("0"):
        rest = token[1:]
        if not rest:
            return 0
        if rest.startswith("x"):
            return parse_radix(rest[1:], 16)
        return parse_radix(rest, 8)
    return parse_radix(token, 10)
