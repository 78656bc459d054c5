from errors import InvalidBaseError, InvalidDigitError

MIN_BASE = 2
MAX_BASE = 36
DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def check_base(base):
    """Return base unchanged if it is an integer in [2, 36]."""
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(base)
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBaseError(base)
    return base


def digit_value(ch: str, base=None, position=None) -> int:
    """Map a single character to its value 0..35 (case-insensitive)."""
    if len(ch) != 1 or not ch.isascii():
        raise InvalidDigitError(ch, base, position)
    c = ch.lower()
    if "0" <= c <= "9":
        return ord(c) - ord("0")
    if "a" <= c <= "z":
        return ord(c) - ord("a") + 10
    raise InvalidDigitError(ch, base, position)


def decode(digits: str, base: int) -> int:
    """Parse a digit string written in `base` into an exact integer.

    Digits are consumed most significant first (Horner's rule), so the
    result never depends on positional weights computed up front.
    """
    check_base(base)
    if not isinstance(digits, str) or not digits:
        raise InvalidDigitError(digits, base)

    acc = 0
    for position, ch in enumerate(digits):
        d = digit_value(ch, base, position)
        if d >= base:
            raise InvalidDigitError(ch, base, position)
        acc = acc * base + d
    return acc


def encode(value: int, base: int) -> str:
    """Write a non-negative integer in `base` using lowercase digits."""
    check_base(base)
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")
    if value == 0:
        return "0"

    out = []
    while value:
        value, d = divmod(value, base)
        out.append(DIGITS[d])
    return "".join(reversed(out))
