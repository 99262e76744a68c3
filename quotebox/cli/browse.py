"""Browse quotes interactively in the terminal."""

import argparse
import logging
import random
import sys
from datetime import datetime
from pathlib import Path

from quotebox.assets import bundled_reader, file_reader
from quotebox.store import QuoteStore, Snapshot

_HELP = """\
Commands:
  <Enter>, n       next quote
  c                list categories
  c <number|name>  show quotes from one category
  h                this help
  q                quit\
"""

_LOAD_PROBLEM = "Data could not be loaded: check the quotes file."
_NO_CATEGORIES = "No categories found. Check the quotes file format."


def setup_logging(log_dir: Path) -> Path:
    """Log store activity to a timestamped file under *log_dir*. Returns its path."""
    log_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = log_dir / f"{timestamp}.log"
    logging.basicConfig(
        filename=log_path,
        level=logging.INFO,
        format="%(asctime)s %(message)s",
        datefmt="%H:%M:%S",
    )
    return log_path


def status_line(snap: Snapshot) -> str:
    if not snap.has_data:
        return _LOAD_PROBLEM
    return f"Category: {snap.active_category or 'All'}"


def render(snap: Snapshot) -> None:
    """Print the current quote with its status line."""
    print()
    print(snap.current_quote)
    print(f"  ({status_line(snap)})")


def print_menu(store: QuoteStore) -> None:
    """Print numbered categories with their quote counts."""
    names = store.categories()
    if not names:
        print(_NO_CATEGORIES)
        return
    for i, name in enumerate(names, 1):
        marker = "*" if name == store.active_category else " "
        print(f"{marker}{i:>3}. {name} ({store.quote_count(name)})")


def _select(store: QuoteStore, arg: str) -> None:
    """Filter by category name or 1-based menu number."""
    names = store.categories()
    if arg.isdigit() and arg not in names:
        idx = int(arg)
        if not 1 <= idx <= len(names):
            print(f"Unknown category number: {arg}")
            return
        arg = names[idx - 1]
    store.filter_quotes(arg)


def dispatch(store: QuoteStore, line: str) -> None:
    """Run a single interactive command."""
    cmd, _, arg = line.partition(" ")
    cmd = cmd.lower()
    arg = arg.strip()
    if cmd in ("", "n", "next"):
        if not store.has_data:
            print(f"{_LOAD_PROBLEM} Nothing to show.")
            return
        store.next_quote()
    elif cmd in ("c", "cat", "categories"):
        if arg and not store.has_data:
            print(f"{_LOAD_PROBLEM} Nothing to show.")
        elif arg:
            _select(store, arg)
        else:
            print_menu(store)
    elif cmd in ("h", "help", "?"):
        print(_HELP)
    else:
        print(f"Unknown command: {cmd} (h for help)")


def _repl(store: QuoteStore) -> None:
    print(
        f"{len(store.categories())} categories, {store.total_quotes()} quotes. "
        "Press Enter for the next quote, h for help, q to quit."
    )
    render(store.snapshot())
    unsubscribe = store.subscribe(render)
    try:
        while True:
            try:
                line = input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if line.lower() in ("q", "quit", "exit"):
                break
            dispatch(store, line)
    finally:
        unsubscribe()


def main() -> None:
    parser = argparse.ArgumentParser(description="Browse categorized quotes.")
    parser.add_argument(
        "--file",
        type=Path,
        default=None,
        help="Quotes file (default: the bundled quotes.txt).",
    )
    parser.add_argument("--category", help="Start in this category.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--list", action="store_true", help="List categories and exit."
    )
    parser.add_argument(
        "--once", action="store_true", help="Print one quote and exit."
    )
    parser.add_argument(
        "--log-dir", type=Path, default=Path("logs"), help="Log directory."
    )
    args = parser.parse_args()

    log_path = setup_logging(args.log_dir)
    store = QuoteStore(rng=random.Random(args.seed), log=logging.info)
    reader = file_reader(args.file) if args.file else bundled_reader()
    result = store.load_from(reader)
    if not result.ok:
        logging.error("Load failed (%s): %s", result.status.value, result.detail)
    if args.category:
        store.filter_quotes(args.category)

    if args.list:
        print_menu(store)
        if not store.has_data:
            sys.exit(1)
        return

    if args.once:
        print(store.current_quote)
        if not store.has_data:
            sys.exit(1)
        return

    print(f"Logging to {log_path}")
    _repl(store)


if __name__ == "__main__":
    main()
