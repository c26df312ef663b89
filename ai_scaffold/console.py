"""Console output helpers: ANSI colors and print-based logging."""

from __future__ import annotations

import os
import sys

# ---------------------------------------------------------------------------
# Terminal colors (respects NO_COLOR and non-TTY)
# ---------------------------------------------------------------------------

_USE_COLOR = (
    sys.stdout.isatty()
    and os.environ.get("NO_COLOR") is None
    and os.environ.get("TERM") != "dumb"
)


def _ansi(code: str) -> str:
    return f"\033[{code}m" if _USE_COLOR else ""


class C:
    """ANSI escape sequences, empty strings when color is disabled."""
    RESET = _ansi("0")
    BOLD = _ansi("1")
    DIM = _ansi("2")
    GREEN = _ansi("32")
    YELLOW = _ansi("33")
    MAGENTA = _ansi("35")
    BOLD_RED = _ansi("1;31")
    BOLD_CYAN = _ansi("1;36")
    BOLD_WHITE = _ansi("1;37")


def section_header(title: str) -> None:
    width = 50
    rule = "─" * max(1, width - len(title) - 5)
    print(f"\n{C.BOLD_CYAN}─── {title} {rule}{C.RESET}")


def summary_line(label: str, count: int, detail: str = "") -> None:
    extra = f"  {C.DIM}({detail}){C.RESET}" if detail else ""
    print(f"  {label:15s} {C.BOLD}{count}{C.RESET}{extra}")


def log(msg: str) -> None:
    print(f"  {msg}")


def log_verbose(msg: str, verbose: bool) -> None:
    if verbose:
        print(f"  {C.DIM}[verbose] {msg}{C.RESET}")


def error(msg: str) -> None:
    print(f"{C.BOLD_RED}Error:{C.RESET} {msg}")
