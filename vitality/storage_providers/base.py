"""Protocol for health data stores."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from vitality.scoring.models import HealthMetrics, HistoryItem


@runtime_checkable
class HealthDataStore(Protocol):
    """Protocol defining the interface for health data stores."""

    def save_history_items(self, items: Sequence[HistoryItem]) -> None:
        """Append scored history lines."""
        ...

    def load_history_items(self, since: Optional[datetime] = None) -> List[HistoryItem]:
        """Load history lines, optionally only those at or after ``since``."""
        ...

    def prune_history(self, now: Optional[datetime] = None) -> int:
        """Drop history lines past the retention window. Returns the number removed."""
        ...

    def save_metrics_snapshot(
        self,
        metrics: HealthMetrics,
        timestamp: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Store a raw metrics snapshot, pruning snapshots past retention relative to ``now``."""
        ...

    def load_metrics_snapshots(self, since: Optional[datetime] = None) -> List[HealthMetrics]:
        """Load snapshots in chronological order (oldest first)."""
        ...

    def save_assistant_reply(self, user_message: str, reply: str, context: str) -> None:
        """Cache an assistant reply together with the health context it was built from."""
        ...

    def get_cached_assistant_reply(self, user_message: str, max_age_hours: int = 24) -> Optional[str]:
        """Newest cached reply for exactly ``user_message`` if it is fresh enough."""
        ...

    def get_user_consent(self) -> Optional[bool]:
        """Stored consent decision, ``None`` if the user was never asked."""
        ...

    def set_user_consent(self, consent: bool) -> None:
        ...

    def clear_all_data(self) -> None:
        """Remove every stored record."""
        ...
