# src/numpart/utility.py

from __future__ import annotations


class UserInputError(Exception):
    pass


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(int(n))
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2)); 0.30103 ~ log10(2)
    est = (n.bit_length() * 30103) // 100000
    # bring into correct decade with at most a couple of steps
    p10 = 10 ** est
    if n < p10:
        while n < p10:
            est -= 1
            p10 //= 10
    else:
        p10 *= 10
        while n >= p10:
            est += 1
            p10 *= 10
    return est + 1


def parse_nonnegative_int(text: str, what: str = "number") -> int:
    """Parse a command-line integer (underscores allowed); reject negatives."""
    s = (text or "").strip().replace("_", "")
    try:
        n = int(s)
    except ValueError:
        raise UserInputError(f"{what} must be an integer, got {text!r}.") from None
    if n < 0:
        raise UserInputError(f"{what} must be non-negative, got {n}.")
    return n


def typename(v: object) -> str:
    return type(v).__name__


def flatten_dotted(d: dict, prefix: str = "") -> dict[str, object]:
    """Flatten nested settings into {'SECTION.KEY': value}."""
    out: dict[str, object] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            out.update(flatten_dotted(v, key))
        else:
            out[key] = v
    return out
