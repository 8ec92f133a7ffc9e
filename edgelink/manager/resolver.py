"""
RedirectResolver module for Edgelink.

Looks a short id up in the mapping store. Every call is a fresh read: there is
no cache in front of the store, so a redirect always reflects what the store
holds right now.
"""

from ..errors import NotFound
from ..storage.base import BaseStorage


class RedirectResolver:
    def __init__(self, storage: BaseStorage):
        self.storage = storage

    def resolve(self, short_id: str) -> str:
        """
        Return the long URL stored for `short_id`, verbatim.

        Raises:
            NotFound: No mapping exists for `short_id`.
            StoreError: The store read failed (propagated from the backend).
        """
        long_url = self.storage.get(short_id)
        if not long_url:
            raise NotFound()
        return long_url
