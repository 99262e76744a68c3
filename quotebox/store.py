"""Categorized quote store: parsing, random selection, and observable state."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from quotebox.assets import Reader, ResourceMissing, ResourceUnreadable
from quotebox.util import (
    MSG_EMPTY_CATEGORY,
    MSG_LOAD_FAILED,
    MSG_LOADING,
    MSG_MALFORMED,
    MSG_NO_DATA,
    MSG_NO_QUOTES_ANYWHERE,
    MSG_RESOURCE_MISSING,
    noop,
)

Catalog = dict[str, list[str]]


class LoadStatus(str, Enum):
    OK = "ok"
    RESOURCE_MISSING = "resource_missing"
    RESOURCE_UNREADABLE = "resource_unreadable"
    MALFORMED_DATA = "malformed_data"


@dataclass
class LoadResult:
    """Outcome of a load attempt."""

    status: LoadStatus
    categories: int = 0
    quotes: int = 0
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.OK


@dataclass(frozen=True)
class Snapshot:
    """Immutable copy of the store's observable state."""

    current_quote: str
    has_data: bool
    active_category: str | None
    current_index: int


def _header_name(line: str) -> str | None:
    """Return the category name if *line* is a [header], else None.

    An empty name ("[]" or "[  ]") is returned as "" so callers can tell it
    apart from a quote line.
    """
    if len(line) >= 2 and line.startswith("[") and line.endswith("]"):
        return line[1:-1].strip()
    return None


def parse_quotes(
    raw_text: str, log: Callable[[str], None] = noop
) -> tuple[Catalog, list[str]]:
    """Parse the bracketed-header quote format.

    Returns (catalog, order) where *order* lists category names in first-seen
    order. A repeated header re-activates the existing category. Quote lines
    before the first header and headers with an empty name are skipped.
    """
    catalog: Catalog = {}
    order: list[str] = []
    current: str | None = None
    for lineno, line in enumerate(raw_text.splitlines(), 1):
        stripped = line.strip()
        if not stripped:
            continue
        name = _header_name(stripped)
        if name is not None:
            if not name:
                log(f"Line {lineno}: empty category header ignored: {stripped}")
                continue
            if name not in catalog:
                catalog[name] = []
                order.append(name)
                log(f"Line {lineno}: category {name!r}.")
            current = name
        elif current is None:
            log(f"Line {lineno}: quote before any category discarded: {stripped[:20]}")
        else:
            catalog[current].append(stripped)
    return catalog, order


class QuoteStore:
    """Holds the parsed catalog and the currently displayed quote.

    The catalog is replaced only by load/load_from. Every mutating call
    notifies subscribers with a fresh Snapshot.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        log: Callable[[str], None] = noop,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._log = log
        self._catalog: Catalog = {}
        self._order: list[str] = []
        self._listeners: list[Callable[[Snapshot], None]] = []
        self.active_category: str | None = None
        self.current_index = 0
        self.current_quote = MSG_LOADING
        self.has_data = False

    # --- Observation ---

    def snapshot(self) -> Snapshot:
        return Snapshot(
            current_quote=self.current_quote,
            has_data=self.has_data,
            active_category=self.active_category,
            current_index=self.current_index,
        )

    def subscribe(self, listener: Callable[[Snapshot], None]) -> Callable[[], None]:
        """Register *listener* and return a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    # --- Queries ---

    def categories(self) -> list[str]:
        """Category names in first-seen order, including empty ones."""
        return list(self._order)

    def quote_count(self, category: str) -> int:
        return len(self._catalog.get(category, ()))

    def total_quotes(self) -> int:
        return sum(len(q) for q in self._catalog.values())

    # --- Loading ---

    def _reset(self) -> None:
        self._catalog = {}
        self._order = []
        self.active_category = None
        self.current_index = 0
        self.has_data = False

    def load_from(self, reader: Reader) -> LoadResult:
        """Read the asset through *reader* and load it.

        Read failures are absorbed into the store state and the returned
        LoadResult; they are never re-raised.
        """
        try:
            raw_text = reader()
        except ResourceMissing as e:
            self._reset()
            self.current_quote = MSG_RESOURCE_MISSING
            self._log(f"Quotes file missing: {e}")
            self._notify()
            return LoadResult(LoadStatus.RESOURCE_MISSING, detail=str(e))
        except ResourceUnreadable as e:
            self._reset()
            self.current_quote = MSG_LOAD_FAILED
            self._log(f"Quotes file unreadable: {e}")
            self._notify()
            return LoadResult(LoadStatus.RESOURCE_UNREADABLE, detail=str(e))
        return self.load(raw_text)

    def load(self, raw_text: str) -> LoadResult:
        """Replace all state with the quotes parsed from *raw_text*."""
        self._reset()
        self._catalog, self._order = parse_quotes(raw_text, log=self._log)
        n_categories = len(self._order)
        total = self.total_quotes()
        if n_categories == 0 or total == 0:
            detail = f"Found {n_categories} categories but {total} quotes."
            self.current_quote = MSG_MALFORMED
            self._log(f"Parse error: {detail}")
            self._notify()
            return LoadResult(
                LoadStatus.MALFORMED_DATA, n_categories, total, detail=detail
            )

        self.has_data = True
        self._log(f"Loaded {n_categories} categories, {total} quotes.")
        self._select_initial()
        self._notify()
        return LoadResult(LoadStatus.OK, n_categories, total)

    # --- Selection ---

    def _random_category(self) -> str | None:
        """Pick a category uniformly among those with at least one quote."""
        eligible = [c for c in self._order if self._catalog[c]]
        if not eligible:
            return None
        return self._rng.choice(eligible)

    def _pick_index(self, size: int, exclude: int | None = None) -> int:
        """Pick a random index in range(size), avoiding *exclude* when possible."""
        if size == 1:
            return 0
        if exclude is None:
            return self._rng.randrange(size)
        candidates = [i for i in range(size) if i != exclude]
        return self._rng.choice(candidates)

    def _show(self, category: str, index: int) -> None:
        self.current_index = index
        self.current_quote = self._catalog[category][index]

    def _select_initial(self) -> None:
        category = self._random_category()
        if category is None:
            self.has_data = False
            self.current_quote = MSG_NO_QUOTES_ANYWHERE
            return
        self.active_category = category
        self._show(category, self._pick_index(len(self._catalog[category])))

    def select_initial(self) -> None:
        """Show a random quote from a random non-empty category."""
        if not self.has_data:
            return
        self._select_initial()
        self._notify()

    def next_quote(self) -> None:
        """Advance to a different random quote within the current scope."""
        if not self.has_data:
            self.current_quote = MSG_NO_DATA
            self._notify()
            return

        category = self.active_category
        if category is None or not self._catalog.get(category):
            category = self._random_category()
            if category is None:
                self.has_data = False
                self.current_quote = MSG_NO_QUOTES_ANYWHERE
                self._notify()
                return
            self.active_category = category

        size = len(self._catalog[category])
        self._show(category, self._pick_index(size, exclude=self.current_index))
        self._log(f"Next quote [{category}]: {self.current_quote}")
        self._notify()

    def filter_quotes(self, category: str) -> None:
        """Restrict selection to *category* and show one of its quotes."""
        if not self.has_data:
            return
        self.active_category = category
        quotes = self._catalog.get(category)
        if not quotes:
            self.current_quote = MSG_EMPTY_CATEGORY
        else:
            self._show(category, self._pick_index(len(quotes)))
        self._log(f"Filter [{category}]: {self.current_quote}")
        self._notify()
