import os
import threading
from typing import Dict, List, Optional


class APIKeyManager:
    """
    API key holder with round-robin rotation.
    Parses comma-separated keys from the environment so a batch run can
    switch to the next market-data key when one hits its rate limit.
    """

    def __init__(self):
        # A parent process can hand its rotation state to a child via _KEY_SET_INDEX
        try:
            self._index = int(os.getenv('_KEY_SET_INDEX', '0'))
        except ValueError:
            self._index = 0

        self._keys: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def register(self, name: str, raw_value: Optional[str]) -> None:
        """
        Register a key variable, supporting comma-separated values.

        Args:
            name: Internal identifier for the key (e.g., 'POLYGON')
            raw_value: Raw string from the environment (e.g., 'key1,key2')
        """
        if not raw_value:
            self._keys[name] = []
            return

        self._keys[name] = [k.strip() for k in raw_value.split(',') if k.strip()]

    def get(self, name: str) -> Optional[str]:
        """Get the active key for `name`, or None when none is configured."""
        candidates = self._keys.get(name, [])
        if not candidates:
            return None
        return candidates[self._index % len(candidates)]

    @property
    def current_index(self) -> int:
        return self._index

    def rotate(self, seen_index: Optional[int] = None) -> int:
        """
        Advance to the next key set and return the active index.

        With `seen_index`, rotation only happens if nobody rotated since
        that index was read: concurrent fetches failing on the same key
        move the rotation on by one step, not one step each.
        """
        with self._lock:
            if seen_index is None or seen_index == self._index:
                self._index += 1
            return self._index

    def has_key(self, name: str) -> bool:
        return len(self._keys.get(name, [])) > 0

    def get_key_count(self, name: str) -> int:
        return len(self._keys.get(name, []))
