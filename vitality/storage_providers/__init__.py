"""Storage providers package.

Only the local JSON store is shipped; anything implementing
``HealthDataStore`` can be injected into the agents instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from vitality.storage_providers.base import HealthDataStore
from vitality.storage_providers.local import LocalHealthDataStore

if TYPE_CHECKING:
    from vitality.config import Settings


# Cached store instance (initialized on first call with settings)
_health_data_store: Optional[HealthDataStore] = None


def get_health_data_store(settings: Optional["Settings"] = None) -> HealthDataStore:
    """Create or return the health data store.

    Args:
        settings: Application settings. If None, returns the cached store
                  (must be initialized first).

    Raises:
        RuntimeError: If settings is None and no store has been initialized.
    """
    global _health_data_store

    if settings is None:
        if _health_data_store is None:
            raise RuntimeError(
                "Health data store not initialized. Call get_health_data_store(settings) first."
            )
        return _health_data_store

    _health_data_store = LocalHealthDataStore(settings.storage)
    return _health_data_store


def reset_health_data_store() -> None:
    """Reset the cached store. Useful for testing."""
    global _health_data_store
    _health_data_store = None


__all__ = [
    "HealthDataStore",
    "LocalHealthDataStore",
    "get_health_data_store",
    "reset_health_data_store",
]
