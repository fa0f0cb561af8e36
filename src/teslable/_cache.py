"""Per-vehicle session cache shared across requests.

Backends may store opaque session material here so a later request can
skip the full handshake. Entries are keyed by VIN, bounded in number
(least recently used entries are evicted) and dropped when a handshake
with that vehicle fails.
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Any

_logger = logging.getLogger(__name__)


class SessionCache:
    """LRU cache of session material keyed by VIN."""

    def __init__(self, max_entries: int) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, Any] = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, vin: object) -> bool:
        return vin in self._entries

    def get(self, vin: str) -> Any | None:
        """Return the cached sessions for *vin*, marking them recently used."""
        try:
            self._entries.move_to_end(vin)
        except KeyError:
            return None
        return self._entries[vin]

    def put(self, vin: str, sessions: Any) -> None:
        """Store *sessions* for *vin*, evicting the oldest entry when full."""
        self._entries[vin] = sessions
        self._entries.move_to_end(vin)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            _logger.debug("Evicted cached sessions for VIN %s", evicted)

    def invalidate(self, vin: str) -> None:
        """Drop cached sessions for *vin* (no-op when absent)."""
        if self._entries.pop(vin, None) is not None:
            _logger.debug("Invalidated cached sessions for VIN %s", vin)
