"""
Storage module for Edgelink (in-memory implementation).

Responsibilities:
    - Hold short id -> long URL pairs in a flat namespace
    - Provide get/put/exists and an atomic put-if-absent

Design:
    - In-memory reference implementation of the BaseStorage contract.
    - Route handlers run in a threadpool, so every access goes through one lock;
      that is what makes `put_if_absent` a real conditional put.
    - For production, swap for the PostgreSQL backend (see db_storage.py)
      through `storage_factory.get_storage`.
"""

import threading
from typing import Dict, Optional

from .base import BaseStorage


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize an empty store.

        Internal schema:
            self.links = {short_id: long_url}
        """
        self.links: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self.links.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self.links[key] = value

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self.links

    def put_if_absent(self, key: str, value: str) -> bool:
        """
        Insert only when `key` is free.

        Returns:
            bool: True if inserted, False if the key was already taken
                  (the existing value is left untouched).
        """
        with self._lock:
            if key in self.links:
                return False
            self.links[key] = value
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self.links)
