"""Hook registry: filters and actions that let integrations adjust map output.

Filters transform a value: every callback registered under a name receives
the current value (plus any extra arguments) and returns the new one.
Actions are notifications: callbacks are called for their side effects and
their return values are ignored.

Callbacks run in ascending priority, then in registration order.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

# Filters
EMBEDDED_MAP_HTML = "embedded_map_html"      # final fragment
MAP_DEFAULT_WIDTH = "map_default_width"      # width when none is requested
MAP_DEFAULT_HEIGHT = "map_default_height"    # height when none is requested
MAP_ZOOM_LEVEL = "map_zoom_level"            # kept for integrations; the bbox sets the zoom

# Actions
MAP_EMBEDDED = "map_embedded"                # (map_index, venue_id)

DEFAULT_PRIORITY = 10


class MapHooks:
    """Filter and action callbacks, keyed by hook name."""

    def __init__(self) -> None:
        self._filters: dict[str, list[tuple[int, Callable]]] = defaultdict(list)
        self._actions: dict[str, list[tuple[int, Callable]]] = defaultdict(list)

    # ── Filters ──────────────────────────────────────────────

    def add_filter(self, name: str, callback: Callable, priority: int = DEFAULT_PRIORITY) -> None:
        _register(self._filters[name], callback, priority)

    def remove_filter(self, name: str, callback: Callable) -> bool:
        return _unregister(self._filters, name, callback)

    def has_filter(self, name: str) -> bool:
        return bool(self._filters.get(name))

    def apply_filters(self, name: str, value: Any, *args: Any) -> Any:
        """Run value through every filter registered under name."""
        for _, callback in list(self._filters.get(name, ())):
            value = callback(value, *args)
        return value

    # ── Actions ──────────────────────────────────────────────

    def add_action(self, name: str, callback: Callable, priority: int = DEFAULT_PRIORITY) -> None:
        _register(self._actions[name], callback, priority)

    def remove_action(self, name: str, callback: Callable) -> bool:
        return _unregister(self._actions, name, callback)

    def has_action(self, name: str) -> bool:
        return bool(self._actions.get(name))

    def do_action(self, name: str, *args: Any) -> None:
        """Call every action registered under name."""
        for _, callback in list(self._actions.get(name, ())):
            callback(*args)


def _register(callbacks: list[tuple[int, Callable]], callback: Callable, priority: int) -> None:
    callbacks.append((priority, callback))
    # Stable sort keeps registration order within a priority
    callbacks.sort(key=lambda entry: entry[0])


def _unregister(registry: dict[str, list[tuple[int, Callable]]], name: str, callback: Callable) -> bool:
    """Remove the first registration of callback under name."""
    callbacks = registry.get(name, [])
    for i, (_, registered) in enumerate(callbacks):
        if registered == callback:
            del callbacks[i]
            return True
    return False
