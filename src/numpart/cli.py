# src/numpart/cli.py

"""
Partition numbers - exact values of p(n)

Description:
    Computes the integer partition function p(n) with Euler's pentagonal
    number recurrence, memoized so tables p(0)..p(N) cost one pass.

usage: see numpart -h
"""

from __future__ import annotations

import argparse
import faulthandler
import re
import sys
import textwrap
import time
import traceback
from importlib.resources import files as pkg_files
from itertools import islice

from colorama import Fore, Style
from colorama import init as colorama_init
from sympy.functions.combinatorial.numbers import partition as sympy_partition

from numpart import __version__ as _ver
from numpart import config as CONFIG
from numpart.fmt import format_term
from numpart.progress import Progress
from numpart.recurrences import PartitionSequence, pentagonal_numbers
from numpart.runtime import APPLY, CFG, current, debug, reset
from numpart.utility import (
    UserInputError,
    flatten_dotted,
    parse_nonnegative_int,
    typename,
)
from numpart.workspace import seed_workspace, workspace_dir

_NUMERIC_RE = re.compile(r"^[+-]?[0-9][0-9_]*$")
_COMMANDS = ("init", "profiles", "where")


def _install_loud_error_handlers(enabled: bool) -> None:
    if not enabled:
        return
    # Always show full Python tracebacks
    faulthandler.enable()

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _resolve_inputs(items: list[str]) -> tuple[str | None, int | None]:
    """Return (profile_or_command, number) from the positionals.

    Rules:
      - one item: numeric -> number; else -> profile/command
      - two items: profile followed by number
    """
    if not items:
        return None, None
    if len(items) == 1:
        if _NUMERIC_RE.match(items[0].strip()):
            return None, parse_nonnegative_int(items[0], "n")
        return items[0], None
    if len(items) == 2:  # noqa: PLR2004
        return items[0], parse_nonnegative_int(items[1], "n")
    raise UserInputError(f"expected at most a profile and a number, got {len(items)} arguments.")


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    commands:
      init
          Create the workspace profile folder and copy the packaged profiles if missing.

      profiles
          List the profiles in the workspace.

      where
          Show the workspace and package paths.
    """)

    p = argparse.ArgumentParser(
        prog="numpart",
        description="Partition numbers — exact p(n) via the pentagonal number recurrence",
        usage=(
            "numpart [[profile] integer] [--backend {int,gmpy2}] [--full] [--check] [--quiet] [--debug]\n"
            "       numpart [profile] (--upto N | --pents K | --index M)\n"
            "       numpart init | profiles | where\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("items", nargs="*", metavar="[profile] integer",
                   help="optional profile name followed by n; prints p(n)")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--upto", metavar="N", help="Print the table p(0)..p(N)")
    mode.add_argument("--pents", metavar="K", help="Print the first K generalized pentagonal numbers")
    mode.add_argument("--index", metavar="M", help="Find k with p(k) = M")
    p.add_argument("--backend", choices=CONFIG.BACKENDS, default=None,
                   help="Integer type for the computation (default: profile ENGINE.BACKEND)")
    p.add_argument("--full", action="store_true", help="Print long values in full instead of abbreviated")
    p.add_argument("--check", action="store_true", help="Cross-check computed values against sympy")
    p.add_argument("--quiet", action="store_true", help="Suppress the progress bar and check summary")
    p.add_argument("--debug", action="store_true", help="Show timings and internal trace info")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")

    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        debug_flag = "--debug" in (sys.argv if argv is None else argv) or current().debug
        if debug_flag:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


def _run_command(command: str) -> int:
    if command == "init":
        ws, copied = seed_workspace(overwrite=False)
        print(f"Workspace ready at: {ws}")
        print(f"Copied -> profiles: {copied}")
        return 0
    if command == "profiles":
        items = CONFIG.list_profiles_with_descriptions()
        if not items:
            print(f"No profiles in {workspace_dir() / 'profiles'} (run 'numpart init').")
            return 0
        width = max(len(nm) for nm, _ in items)
        for nm, desc in items:
            print(f"{Fore.CYAN}{nm:<{width}}{Style.RESET_ALL}  {desc}")
        return 0
    # where
    print(f"Workspace: {workspace_dir()}")
    print(f"Package:   {pkg_files('numpart')}")
    return 0


def _debug_profile(selected: CONFIG.Settings) -> None:
    debug(f"active profile: {selected.name}")
    if selected._source:
        debug(f"profile file: {selected._source}")
    flat = flatten_dotted(selected.as_dict())
    for k in sorted(flat, key=str.lower):
        v = CFG(k, None)
        debug(f"  {k:.<40} {v!r} ({typename(v)})")


def _check_against_sympy(values: dict[int, int], *, quiet: bool) -> int:
    bad = [n for n, v in values.items() if int(v) != int(sympy_partition(n))]
    if bad:
        shown = ", ".join(f"p({n})" for n in bad[:10])
        _print_user_error(f"check failed for {len(bad)} value(s): {shown}")
        return 1
    if not quiet:
        print(f"{Fore.GREEN}check: {len(values)} value(s) agree with sympy{Style.RESET_ALL}")
    return 0


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init(autoreset=True)

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = reset()
    rt.debug = bool(args.debug)

    _install_loud_error_handlers(args.debug)

    profile, n = _resolve_inputs(args.items)

    if profile in _COMMANDS:
        if n is not None:
            parser.error(f"'{profile}' does not take a number")
        return _run_command(profile)

    mode = args.upto is not None or args.pents is not None or args.index is not None
    if n is not None and mode:
        parser.error("give either a number or one of --upto/--pents/--index, not both")
    if n is None and not mode:
        parser.print_usage(sys.stderr)
        raise UserInputError("nothing to do: give n, --upto N, --pents K or --index M.")

    # Load & apply profile
    selected = CONFIG.load_settings(profile or "default")
    APPLY(selected)
    if args.debug:
        rt.debug = True
        _debug_profile(selected)
    if args.quiet:
        rt.progress = False

    backend = args.backend or CFG("ENGINE.BACKEND", "int")
    debug(f"backend: {backend}")

    if args.pents is not None:
        k = parse_nonnegative_int(args.pents, "--pents")
        print(", ".join(str(g) for g in islice(pentagonal_numbers(), k)))
        return 0

    seq = PartitionSequence(backend)

    if args.index is not None:
        m = parse_nonnegative_int(args.index, "--index")
        t0 = time.perf_counter()
        k = seq.index_of(m)
        debug(f"index_of({m}) scanned {seq.computed} value(s) in {time.perf_counter() - t0:.4f}s")
        if k is None:
            print(f"{m} is not a partition number.")
        elif k == 0:
            print(f"{Fore.GREEN}{m} = p(0) = p(1){Style.RESET_ALL}")
        else:
            print(f"{Fore.GREEN}{m} = p({k}){Style.RESET_ALL}")
        return 0

    if args.upto is not None:
        top = parse_nonnegative_int(args.upto, "--upto")
        # stdout carries the table; the bar goes to an interactive stderr only
        prog = Progress(top + 1, enabled=rt.progress and sys.stderr.isatty(), stream=sys.stderr)
        t0 = time.perf_counter()
        for i in range(top + 1):
            seq.value(i)
            prog.update(i, f"p({i})")
        prog.done()
        debug(f"computed p(0)..p({top}) in {time.perf_counter() - t0:.4f}s")

        width = len(f"p({top})")
        for i in range(top + 1):
            print(format_term(i, seq[i], full=args.full, width=width))
        if args.check:
            return _check_against_sympy({i: seq[i] for i in range(top + 1)}, quiet=args.quiet)
        return 0

    t0 = time.perf_counter()
    value = seq.value(n)
    debug(f"computed p({n}) in {time.perf_counter() - t0:.4f}s")
    print(format_term(n, value, full=args.full))
    if args.check:
        return _check_against_sympy({n: value}, quiet=args.quiet)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
