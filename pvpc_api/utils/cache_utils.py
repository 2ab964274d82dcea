from typing import Any, Dict, Optional, Tuple
from datetime import datetime, timedelta

from .clock import Clock


class TTLCache:
    """In-process key/value cache whose entries expire after a TTL."""

    def __init__(self, clock: Clock):
        self.clock = clock
        self._entries: Dict[str, Tuple[datetime, Any]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self.clock.now() >= expires_at:
            # another thread may have dropped it already
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        now = self.clock.now()
        self._purge_expired(now)
        self._entries[key] = (now + timedelta(seconds=ttl_seconds), value)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def delete_prefix(self, prefix: str) -> int:
        """Drop the key `prefix` and every key scoped under `prefix:`."""
        matching = [
            key for key in list(self._entries)
            if key == prefix or key.startswith(f"{prefix}:")
        ]
        for key in matching:
            self._entries.pop(key, None)
        return len(matching)

    def clear(self) -> None:
        self._entries.clear()

    def _purge_expired(self, now: datetime) -> None:
        # date/hour scoped keys are never read again once their period is over
        for key, (expires_at, _) in list(self._entries.items()):
            if now >= expires_at:
                self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
