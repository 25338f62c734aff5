from __future__ import annotations

from prometheus_client import Counter

MENU_ITEM_WRITES_TOTAL = Counter(
    "rms_menu_item_writes_total",
    "Total number of menu catalog writes.",
    ["operation"],
)

MENU_CACHE_LOOKUPS_TOTAL = Counter(
    "rms_menu_cache_lookups_total",
    "Menu listing cache lookups by outcome.",
    ["outcome"],
)


def record_menu_write(operation: str) -> None:
    MENU_ITEM_WRITES_TOTAL.labels(operation=operation).inc()


def record_cache_lookup(hit: bool) -> None:
    MENU_CACHE_LOOKUPS_TOTAL.labels(outcome="hit" if hit else "miss").inc()
