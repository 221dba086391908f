"""Local filesystem health data store."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from uuid import uuid4

from pydantic import ValidationError

from vitality.config import StorageSettings
from vitality.scoring.models import HealthMetrics, HistoryItem

logger = logging.getLogger(__name__)

HISTORY_FILE = "history_items.json"
SNAPSHOTS_FILE = "metrics_snapshots.json"
REPLIES_FILE = "assistant_replies.json"
CONSENT_FILE = "consent.json"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _record_time(record: Dict[str, Any]) -> Optional[datetime]:
    try:
        return _as_utc(datetime.fromisoformat(record["timestamp"]))
    except (KeyError, TypeError, ValueError):
        return None


class LocalHealthDataStore:
    """Health data store backed by JSON files on the local filesystem.

    This store keeps everything under a single directory:

        {storage_root}/history_items.json
        {storage_root}/metrics_snapshots.json
        {storage_root}/assistant_replies.json
        {storage_root}/consent.json

    History and snapshots older than the retention window are dropped on
    write; only the newest cached replies are kept.
    """

    def __init__(self, settings: StorageSettings) -> None:
        self._settings = settings
        self._storage_root = Path(settings.local_root).resolve()
        self._storage_root.mkdir(parents=True, exist_ok=True)

        logger.info(
            "Initialized local health data store at '%s'",
            self._storage_root
        )

    @property
    def retention(self) -> timedelta:
        return timedelta(days=self._settings.history_retention_days)

    def _read(self, filename: str, default: Any) -> Any:
        path = self._storage_root / filename
        if not path.exists():
            return default
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s, treating as empty: %s", path, exc)
            return default

    def _write(self, filename: str, payload: Any) -> None:
        path = self._storage_root / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)
        logger.debug("Saved %s", path)

    # ------------------------------------------------------------------
    # History items
    # ------------------------------------------------------------------

    def _history_records(self) -> List[Dict[str, Any]]:
        records = self._read(HISTORY_FILE, [])
        return records if isinstance(records, list) else []

    def save_history_items(self, items: Sequence[HistoryItem]) -> None:
        records = self._history_records()
        records.extend(item.model_dump(mode="json") for item in items)
        self._write(HISTORY_FILE, records)
        self.prune_history()

    def load_history_items(self, since: Optional[datetime] = None) -> List[HistoryItem]:
        items: List[HistoryItem] = []
        for record in self._history_records():
            try:
                item = HistoryItem.model_validate(record)
            except ValidationError as exc:
                logger.warning("Skipping invalid history record: %s", exc)
                continue
            if since is None or _as_utc(item.timestamp) >= _as_utc(since):
                items.append(item)
        return items

    def prune_history(self, now: Optional[datetime] = None) -> int:
        cutoff = _as_utc(now or _utcnow()) - self.retention
        kept = self.load_history_items(since=cutoff)
        removed = len(self._history_records()) - len(kept)
        if removed:
            self._write(HISTORY_FILE, [item.model_dump(mode="json") for item in kept])
            logger.info("Pruned %d history items older than %s", removed, cutoff.date())
        return removed

    # ------------------------------------------------------------------
    # Metric snapshots
    # ------------------------------------------------------------------

    def _snapshot_records(self) -> List[Dict[str, Any]]:
        records = self._read(SNAPSHOTS_FILE, [])
        return records if isinstance(records, list) else []

    def save_metrics_snapshot(
        self,
        metrics: HealthMetrics,
        timestamp: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> None:
        """Append a snapshot and drop every snapshot older than ``now`` minus retention."""
        now = _as_utc(now or _utcnow())
        timestamp = _as_utc(timestamp or now)
        cutoff = now - self.retention
        records = self._snapshot_records()
        records.append({
            "id": str(uuid4()),
            "timestamp": timestamp.isoformat(),
            "metrics": metrics.model_dump(mode="json"),
        })
        kept = []
        for record in records:
            recorded_at = _record_time(record)
            if recorded_at is not None and recorded_at >= cutoff:
                kept.append(record)
        if len(kept) < len(records):
            logger.info("Dropped %d snapshots older than %s", len(records) - len(kept), cutoff.date())
        kept.sort(key=lambda record: record["timestamp"])
        self._write(SNAPSHOTS_FILE, kept)

    def load_metrics_snapshots(self, since: Optional[datetime] = None) -> List[HealthMetrics]:
        snapshots: List[HealthMetrics] = []
        for record in sorted(self._snapshot_records(), key=lambda r: r.get("timestamp", "")):
            timestamp = _record_time(record)
            try:
                metrics = HealthMetrics.model_validate(record.get("metrics"))
            except ValidationError as exc:
                logger.warning("Skipping invalid metrics snapshot: %s", exc)
                continue
            if timestamp is None:
                continue
            if since is None or timestamp >= _as_utc(since):
                snapshots.append(metrics)
        return snapshots

    # ------------------------------------------------------------------
    # Assistant replies
    # ------------------------------------------------------------------

    def _reply_records(self) -> List[Dict[str, Any]]:
        records = self._read(REPLIES_FILE, [])
        return records if isinstance(records, list) else []

    def save_assistant_reply(self, user_message: str, reply: str, context: str) -> None:
        records = self._reply_records()
        records.append({
            "id": str(uuid4()),
            "user_message": user_message,
            "reply": reply,
            "context": context,
            "timestamp": _utcnow().isoformat(),
        })
        records.sort(key=lambda record: record["timestamp"], reverse=True)
        self._write(REPLIES_FILE, records[: self._settings.max_cached_replies])

    def get_cached_assistant_reply(self, user_message: str, max_age_hours: int = 24) -> Optional[str]:
        cutoff = _utcnow() - timedelta(hours=max_age_hours)
        for record in sorted(self._reply_records(), key=lambda r: r.get("timestamp", ""), reverse=True):
            if record.get("user_message") != user_message:
                continue
            timestamp = _record_time(record)
            if timestamp is None:
                continue
            if timestamp >= cutoff:
                return record.get("reply")
            return None
        return None

    # ------------------------------------------------------------------
    # Consent
    # ------------------------------------------------------------------

    def get_user_consent(self) -> Optional[bool]:
        payload = self._read(CONSENT_FILE, {})
        consent = payload.get("consent") if isinstance(payload, dict) else None
        return consent if isinstance(consent, bool) else None

    def set_user_consent(self, consent: bool) -> None:
        self._write(CONSENT_FILE, {"consent": consent, "updated_at": _utcnow().isoformat()})

    def clear_all_data(self) -> None:
        for filename in (HISTORY_FILE, SNAPSHOTS_FILE, REPLIES_FILE, CONSENT_FILE):
            path = self._storage_root / filename
            if path.exists():
                path.unlink()
        logger.info("Cleared all health data under %s", self._storage_root)
