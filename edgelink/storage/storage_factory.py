"""
Storage factory – switch mapping-store backend from config
==========================================================

Centralizes selection of the storage backend (in-memory vs PostgreSQL) so the
allocator, resolver and routes stay ignorant of where data lives.

- Reads environment **at call time** so tests can flip backends with monkeypatch.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- EDGELINK_STORAGE_BACKEND: "memory" (default) or "postgres"
- EDGELINK_DB_DSN:          DSN string if backend=="postgres"
"""

import logging
import os
from typing import Optional

# In-memory storage always available/lightweight
from edgelink.storage.storage import Storage

log = logging.getLogger(__name__)


def get_storage(backend: Optional[str] = None, **kwargs):
    """
    Return a BaseStorage instance based on configuration.

    Parameters
    ----------
    backend : str, optional
        "memory" (default) or "postgres". If omitted, reads EDGELINK_STORAGE_BACKEND.
    kwargs : dict
        Extra args for the backend. For postgres, use dsn="...".

    Raises
    ------
    ValueError
        Missing DSN for postgres, or an unknown backend name.
    """
    be = (backend or os.getenv("EDGELINK_STORAGE_BACKEND", "memory")).strip().lower()
    log.debug("Selected storage backend: %r", be)

    if be == "memory":
        return Storage()

    if be == "postgres":
        dsn = kwargs.get("dsn") or os.getenv("EDGELINK_DB_DSN", "")
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env EDGELINK_DB_DSN)")
        # Local import to avoid hard dependency when not using postgres
        from edgelink.storage.db_storage import DBStorage
        return DBStorage(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")
