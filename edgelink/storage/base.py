"""
Base mapping-store interface for Edgelink.

Purpose:
    Define the small contract every backend (in-memory, PostgreSQL, a managed KV)
    implements: get/put by key, an existence check, and a conditional put.
    Keys are short ids, values are long URLs, both plain strings.

Failure model:
    Backends raise `edgelink.errors.StoreError` when the store itself fails.
    A missing key is not a failure: `get` returns None.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.
"""

from abc import ABC, abstractmethod
from typing import Optional


class BaseStorage(ABC):
    """Abstract base class for mapping-store backends."""

    @abstractmethod  # pragma: no cover
    def get(self, key: str) -> Optional[str]:
        """
        Return the value stored under `key`, or None if absent.

        Raises:
            StoreError: If the read fails.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def put(self, key: str, value: str) -> None:
        """
        Store `value` under `key`, replacing any previous value (last write wins).

        Raises:
            StoreError: If the write fails.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def exists(self, key: str) -> bool:
        """Return True if `key` is present."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def put_if_absent(self, key: str, value: str) -> bool:
        """
        Store `value` under `key` only if the key is not present, atomically.

        Returns:
            bool: True if the value was written, False if the key already existed.

        Raises:
            StoreError: If the write fails.
        """
        raise NotImplementedError
