"""
IdentifierAllocator module for Edgelink.

Responsibilities:
    - Validate the long URL and any caller-supplied custom id
    - Claim custom ids without ever overwriting an existing mapping
    - Generate random ids when no custom id is given
    - Write the mapping, synchronously or deferred past the response

Design notes:
    - Custom ids go through the store's atomic `put_if_absent`, so two concurrent
      creates of the same id cannot both succeed. The write is therefore always
      synchronous for custom ids: its result decides between 201 and 409.
    - Generated ids are written with a plain `put` and no existence check.
      A collision (about 1 in 62**6 per pair at length 6) overwrites the older
      mapping; this is a known, accepted limitation.
    - Generated-id writes can be handed to a `defer(fn, *args)` callable, which is
      exactly the signature of FastAPI's `BackgroundTasks.add_task`. The write then
      runs after the response is sent, still inside the request's scope. A failure
      there can no longer reach the caller, so it is logged.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import IdConflict, InvalidCustomId, InvalidUrl, StoreError
from ..storage.base import BaseStorage
from .strategies import BaseStrategy, get_strategy_from_config
from .validation import is_valid_custom_id, is_valid_url

log = logging.getLogger(__name__)

Defer = Callable[..., None]  # defer(fn, *args)


@dataclass(frozen=True)
class ShortLink:
    short_id: str
    long_url: str


class IdentifierAllocator:
    """Creates short links on top of an injected mapping store."""

    def __init__(self, storage: BaseStorage, strategy: Optional[BaseStrategy] = None):
        """
        Args:
            storage (BaseStorage): Mapping store backend.
            strategy (Optional[BaseStrategy]): Id generator; defaults to the
                configured RandomStrategy.
        """
        self.storage = storage
        self.strategy = strategy or get_strategy_from_config()

    def create(self, long_url: str, custom_id: Optional[str] = None, defer: Optional[Defer] = None) -> ShortLink:
        """
        Create a short link for `long_url`.

        Rules:
            - `long_url` must have a scheme and a host.
            - A non-empty `custom_id` must match [A-Za-z0-9_-]+ and be free.
              An empty string is treated the same as no custom id.
            - Without a custom id, a random id is generated and written
              (deferred through `defer` when given).

        Returns:
            ShortLink: The id and the long URL exactly as given.

        Raises:
            InvalidUrl: `long_url` is not an absolute URL.
            InvalidCustomId: `custom_id` has characters outside the allowed set.
            IdConflict: `custom_id` is already taken.
            StoreError: A synchronous store write failed.
        """
        if not is_valid_url(long_url):
            raise InvalidUrl()

        if custom_id:
            if not is_valid_custom_id(custom_id):
                raise InvalidCustomId()
            if not self.storage.put_if_absent(custom_id, long_url):
                log.debug("custom id %r already taken", custom_id)
                raise IdConflict()
            return ShortLink(custom_id, long_url)

        short_id = self.strategy.generate()
        if defer is None:
            self.storage.put(short_id, long_url)
        else:
            defer(self._write_in_background, short_id, long_url)
        return ShortLink(short_id, long_url)

    def _write_in_background(self, short_id: str, long_url: str) -> None:
        """Deferred write; the response is already gone, so failures end here."""
        try:
            self.storage.put(short_id, long_url)
        except StoreError:
            log.exception("background write failed for short id %r", short_id)
