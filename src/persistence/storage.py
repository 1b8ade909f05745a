"""Ledger snapshot storage."""

import json
import logging
import re
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional

from config.settings import Settings, get_settings
from src.engine.ledger import CollateralLedger

logger = logging.getLogger(__name__)


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types."""

    def default(self, obj):
        if isinstance(obj, Decimal):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class LedgerStorage:
    """
    Persistent storage for ledger snapshots.

    Uses JSON files for simplicity and human-readability; amounts are stored
    as decimal strings so 18-decimal integers survive the round trip.
    Directory structure:
        storage_dir/
            ledgers/
                {snapshot_id}.json
    """

    def __init__(self, storage_dir: Optional[Path] = None, settings: Optional[Settings] = None):
        """
        Initialize storage.

        Args:
            storage_dir: Base directory for storage (default: settings.storage_dir)
            settings: Settings supplying the default directory
        """
        if storage_dir is None:
            storage_dir = (settings or get_settings()).storage_dir

        self.storage_dir = Path(storage_dir)
        self.ledgers_dir = self.storage_dir / "ledgers"

        # Ensure directories exist
        self.ledgers_dir.mkdir(parents=True, exist_ok=True)

    def save_ledger(
        self,
        ledger: CollateralLedger,
        snapshot_id: Optional[str] = None,
        label: str = "ledger",
    ) -> str:
        """
        Save a ledger snapshot.

        Args:
            ledger: Ledger to save
            snapshot_id: Optional custom ID (default: auto-generated)
            label: Human-readable label used in generated IDs

        Returns:
            Snapshot ID
        """
        if snapshot_id is None:
            snapshot_id = self._generate_snapshot_id(label)

        file_path = self.ledgers_dir / f"{snapshot_id}.json"

        data = ledger.to_dict()
        data["_id"] = snapshot_id
        data["_label"] = label
        data["_saved_at"] = datetime.now(timezone.utc)
        data["_total_debt"] = str(ledger.total_debt)

        with open(file_path, "w") as f:
            json.dump(data, f, cls=DecimalEncoder, indent=2)

        logger.info(f"Saved ledger snapshot: {snapshot_id}")
        return snapshot_id

    def load_ledger(self, snapshot_id: str) -> Optional[CollateralLedger]:
        """
        Load a ledger snapshot.

        Args:
            snapshot_id: Snapshot ID to load

        Returns:
            CollateralLedger or None if not found

        Raises:
            ValueError: If the stored total debt disagrees with the positions
        """
        file_path = self.ledgers_dir / f"{snapshot_id}.json"

        if not file_path.exists():
            logger.warning(f"Ledger snapshot not found: {snapshot_id}")
            return None

        with open(file_path, "r") as f:
            data = json.load(f)

        ledger = CollateralLedger.from_dict(data)

        recorded = data.get("_total_debt")
        if recorded is not None and int(recorded) != ledger.total_debt:
            logger.error(
                f"Ledger snapshot {snapshot_id} records total debt {recorded}, "
                f"positions sum to {ledger.total_debt}"
            )
            raise ValueError(f"Inconsistent ledger snapshot: {snapshot_id}")

        return ledger

    def list_ledgers(self) -> List[Dict[str, Any]]:
        """
        List all saved snapshots.

        Returns:
            List of snapshot summaries (id, label, positions, total debt)
        """
        snapshots = []

        for file_path in self.ledgers_dir.glob("*.json"):
            with open(file_path, "r") as f:
                data = json.load(f)

            users = set(data.get("collateral", {})) | set(data.get("debt", {}))
            snapshots.append({
                "id": data.get("_id", file_path.stem),
                "label": data.get("_label"),
                "positions": len(users),
                "total_debt": data.get("_total_debt"),
                "saved_at": data.get("_saved_at"),
            })

        # Sort by saved_at descending
        snapshots.sort(key=lambda x: x.get("saved_at") or "", reverse=True)
        return snapshots

    def delete_ledger(self, snapshot_id: str) -> bool:
        """
        Delete a ledger snapshot.

        Returns:
            True if deleted, False if not found
        """
        file_path = self.ledgers_dir / f"{snapshot_id}.json"

        if file_path.exists():
            file_path.unlink()
            logger.info(f"Deleted ledger snapshot: {snapshot_id}")
            return True

        return False

    def _generate_snapshot_id(self, label: str) -> str:
        """Generate a snapshot ID from label + timestamp."""
        safe_label = re.sub(r"[^a-z0-9]+", "_", label.lower())[:20].strip("_")
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        return f"{safe_label}_{timestamp}"
