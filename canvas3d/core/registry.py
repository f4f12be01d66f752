"""Registry of successfully loaded modules."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)

ID_PREFIX = "module_"


@dataclass(frozen=True)
class ModuleRecord:
    """One loaded module. Never mutated after creation."""
    id: str
    sequence: int
    description: str
    code: str
    timestamp: datetime
    handle: Any = None

    @property
    def has_handle(self) -> bool:
        return bool(self.handle)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "code": self.code,
            "timestamp": self.timestamp.isoformat(),
            "has_handle": self.has_handle,
        }


@dataclass(frozen=True)
class RegistrySnapshot:
    """Registry contents and id counter at one point in time."""
    records: Dict[str, ModuleRecord]
    next_sequence: int


class ModuleRegistry:
    """
    Mapping of module id -> ModuleRecord.

    Ids are `module_<n>` with n taken from a counter that is never reset,
    so ids stay unique and increasing across clear(). The registry is also
    handed to modules, which may look records up, iterate them, or delete
    them like a dict.
    """

    def __init__(self):
        self._records: Dict[str, ModuleRecord] = {}
        self._next_sequence = 0

    def register(self, description: str, code: str, handle: Any = None) -> str:
        """
        Register a module.

        Args:
            description: Natural-language request the module came from
            code: Exact source that was executed
            handle: Value the module exposed, if any

        Returns:
            The new module id
        """
        sequence = self._next_sequence
        self._next_sequence += 1
        module_id = f"{ID_PREFIX}{sequence}"
        self._records[module_id] = ModuleRecord(
            id=module_id,
            sequence=sequence,
            description=description,
            code=code,
            timestamp=datetime.now(timezone.utc),
            handle=handle,
        )
        logger.info(f"Registered module: {module_id} ({description!r})")
        return module_id

    def unregister(self, module_id: str) -> Optional[ModuleRecord]:
        """Remove a single record. Returns it, or None if unknown."""
        record = self._records.pop(module_id, None)
        if record is not None:
            logger.info(f"Unregistered module: {module_id}")
        return record

    def get(self, module_id: str, default: Any = None) -> Optional[ModuleRecord]:
        """Get a module record by id."""
        return self._records.get(module_id, default)

    def list(self) -> List[ModuleRecord]:
        """All records, ordered by ascending id sequence (creation order)."""
        return sorted(self._records.values(), key=lambda r: r.sequence)

    def clear(self):
        """
        Remove every record.

        Event handlers subscribed by the removed modules stay live; the host
        is responsible for unsubscribing them (see Canvas.reset).
        """
        count = len(self._records)
        self._records.clear()
        logger.info(f"Cleared module registry ({count} records)")

    def snapshot(self) -> RegistrySnapshot:
        """Capture records and counter so a failed load can be undone."""
        return RegistrySnapshot(dict(self._records), self._next_sequence)

    def restore(self, snapshot: RegistrySnapshot):
        """Put records and counter back to a previous snapshot."""
        if self._records.keys() != snapshot.records.keys() or self._next_sequence != snapshot.next_sequence:
            logger.info("Rolled back registry changes made by a failed module")
        self._records = dict(snapshot.records)
        self._next_sequence = snapshot.next_sequence

    def keys(self) -> List[str]:
        return [record.id for record in self.list()]

    def info(self) -> List[Dict[str, Any]]:
        """Get display information about all modules."""
        return [record.to_dict() for record in self.list()]

    def __getitem__(self, module_id: str) -> ModuleRecord:
        return self._records[module_id]

    def __setitem__(self, module_id: str, record: ModuleRecord):
        if not isinstance(record, ModuleRecord):
            raise TypeError("Registry entries must be ModuleRecord instances")
        if record.id != module_id:
            raise KeyError(f"Record id {record.id} does not match key {module_id}")
        self._records[module_id] = record

    def __delitem__(self, module_id: str):
        del self._records[module_id]

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self):
        return f"<ModuleRegistry: {len(self)} modules>"
