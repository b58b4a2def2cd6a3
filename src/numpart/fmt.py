# src/numpart/fmt.py
from __future__ import annotations

import re

from colorama import Fore, Style

from numpart.runtime import CFG
from numpart.utility import dec_digits

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub("", s)


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    n = int(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    # If not long enough, fall back to normal str()
    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    # compute first/last blocks exactly
    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    # zero-pad last block to width 'tail'
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def format_value(value: int, *, full: bool = False) -> str:
    """
    Render a partition value for display.
    Uses FORMATTING.NUM_ABBR_* unless full=True; abbreviated values carry their digit count.
    """
    if full:
        return str(int(value))
    threshold = int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 60))
    head = int(CFG("FORMATTING.NUM_ABBR_HEAD", 20))
    tail = int(CFG("FORMATTING.NUM_ABBR_TAIL", 20))
    s = abbr_int_fast(value, head=head, tail=tail, threshold=threshold)
    if "…" in s:
        s += f" {Style.DIM}({dec_digits(value)} digits){Style.RESET_ALL}"
    return s


def format_term(n: int, value: int, *, full: bool = False, width: int = 0) -> str:
    """'p(n) = value' with the label colored."""
    label = f"p({n})".rjust(width)
    return f"{Fore.CYAN}{label}{Style.RESET_ALL} = {format_value(value, full=full)}"
