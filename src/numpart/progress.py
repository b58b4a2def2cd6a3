# src/numpart/progress.py
from __future__ import annotations

import sys
import time

THROTTLE = 0.05     # seconds between redraws
BAR_LEN = 24


class Progress:
    """Single-line progress bar, on stderr by default; no-op when disabled."""

    def __init__(self, total: int, *, enabled: bool = True, stream=None):
        self.total = max(1, int(total))
        self.enabled = enabled
        self.stream = stream or sys.stderr
        self.last_draw = float("-inf")
        self.spin = "|/-\\"
        self.i = 0

    def update(self, done: int, label: str = ""):
        if not self.enabled:
            return
        now = time.perf_counter()
        if now - self.last_draw < THROTTLE:
            return
        self.last_draw = now
        self.i = (self.i + 1) % len(self.spin)
        frac = min(max(done / self.total, 0.0), 1.0)
        fill = int(frac * BAR_LEN)
        bar = "#" * fill + "-" * (BAR_LEN - fill)
        self.stream.write(f"\r[{self.spin[self.i]}] [{bar}] {int(frac * 100):3d}%  {label[:50]}")
        self.stream.flush()

    def done(self):
        if not self.enabled:
            return
        self.stream.write("\r" + " " * 80 + "\r")
        self.stream.flush()
