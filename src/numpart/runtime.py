# src/numpart/runtime.py
from __future__ import annotations

import sys
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any

from colorama import Fore, Style


@dataclass
class Runtime:
    profile_name: str = "default"
    settings: dict[str, Any] = field(default_factory=dict)
    debug: bool = False     # controls verbosity / tracebacks
    progress: bool = True   # progress bar for long tables

    def apply(self, settings: Any) -> None:
        self.profile_name = getattr(settings, "name", None) or "default"

        if hasattr(settings, "as_dict") and callable(settings.as_dict):
            cfg = settings.as_dict()
        elif isinstance(settings, dict):
            cfg = settings
        else:
            # grab UPPERCASE attributes from simple objects / modules
            cfg = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}
        self.settings = dict(cfg)

        # sync runtime flags from profile
        dbg = self.get("BEHAVIOUR.DEBUG", None)
        if isinstance(dbg, bool):
            self.debug = dbg

        prog = self.get("BEHAVIOUR.PROGRESS", None)
        if isinstance(prog, bool):
            self.progress = prog

    def get(self, key: str, default: Any = None) -> Any:
        """Support dotted lookups, e.g., 'ENGINE.BACKEND'."""
        if not key:
            return default
        cur = self.settings
        for part in key.split("."):
            if isinstance(cur, dict) and part in cur:
                cur = cur[part]
            else:
                return default
        return cur


# --- Context management ---

_current_runtime: ContextVar[Runtime | None] = ContextVar("numpart_runtime", default=None)


def current() -> Runtime:
    rt = _current_runtime.get()
    if rt is None:
        rt = Runtime()
        _current_runtime.set(rt)
    return rt


def reset() -> Runtime:
    """Install a fresh runtime for the current context and return it."""
    rt = Runtime()
    _current_runtime.set(rt)
    return rt


def APPLY(settings: Any) -> None:
    current().apply(settings)


def CFG(key: str, default: Any = None) -> Any:
    return current().get(key, default)


def debug(msg: str) -> None:
    """Print a [debug] line on stderr when the runtime runs in debug mode."""
    if current().debug:
        print(f"{Fore.YELLOW}[debug]{Style.RESET_ALL} {msg}", file=sys.stderr)

