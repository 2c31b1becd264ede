"""
Color-coded terminal output and logging setup.

The dashboard prints through the helpers below; the API server uses
setup_logging() so both share one log format.
Uses colorama for cross-platform terminal color support.
"""

import datetime
import logging
import os
import sys
from typing import Optional

from colorama import Fore, Style, init

# Initialize colorama (auto-reset after each print)
init(autoreset=True)

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


# ---------------------------------------------------------------------------
# Color constants for dashboard output
# ---------------------------------------------------------------------------

class C:
    """Color shortcuts for dashboard output."""
    HEADER = Fore.CYAN + Style.BRIGHT
    STEP = Fore.BLUE + Style.BRIGHT
    OK = Fore.GREEN + Style.BRIGHT
    WARN = Fore.YELLOW + Style.BRIGHT
    ERR = Fore.RED + Style.BRIGHT
    DIM = Style.DIM
    TITLE = Fore.MAGENTA + Style.BRIGHT
    VALUE = Fore.GREEN
    RESET = Style.RESET_ALL


def _ts() -> str:
    return datetime.datetime.now().strftime("%H:%M:%S")


# ---------------------------------------------------------------------------
# Dashboard output
# ---------------------------------------------------------------------------

def header(msg: str) -> None:
    """Print a bold section header."""
    print(f"\n{C.HEADER}{'='*60}")
    print(f"  {msg}")
    print(f"{'='*60}{C.RESET}\n")


def step(msg: str) -> None:
    print(f"{C.STEP}[{_ts()}] >> {msg}{C.RESET}")


def info(msg: str) -> None:
    """Print an info message."""
    print(f"{C.DIM}[{_ts()}]{C.RESET} {msg}")


def ok(msg: str) -> None:
    print(f"{C.OK}[{_ts()}] OK {msg}{C.RESET}")


def warn(msg: str) -> None:
    print(f"{C.WARN}[{_ts()}] WARN {msg}{C.RESET}")


def err(msg: str) -> None:
    """Print an error."""
    print(f"{C.ERR}[{_ts()}] ERR {msg}{C.RESET}")


def card(title: str, lines: list[str]) -> None:
    """Print one company card: a bright title and indented detail lines."""
    print(f"{C.TITLE}{title}{C.RESET}")
    for line in lines:
        print(f"    {line}")
    print()


def summary_table(title: str, rows: list[tuple[str, str]]) -> None:
    """Print a summary table with label-value pairs."""
    print(f"\n{C.HEADER}{title}{C.RESET}")
    max_label = max(len(r[0]) for r in rows) if rows else 0
    for label, value in rows:
        print(f"  {label:<{max_label}}  {C.VALUE}{value}{C.RESET}")
    print()


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger for the API server.

    Console gets `level` and above; when `log_file` is given it also
    receives DEBUG and above.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if log_file else level.upper())

    # Prevent duplicate handlers on re-import
    if any(getattr(h, "_company_api", False) for h in logger.handlers):
        return logger

    fmt = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT)

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level.upper())
    ch.setFormatter(fmt)
    ch._company_api = True
    logger.addHandler(ch)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(fmt)
        fh._company_api = True
        logger.addHandler(fh)

    return logger
