from __future__ import annotations

from typing import Dict, Generic, List, Optional, Protocol, TypeVar


class Identified(Protocol):
    id: str


T = TypeVar("T", bound=Identified)


class Repository(Protocol[T]):
    def create(self, record: T) -> T: ...

    def get(self, record_id: str) -> Optional[T]: ...

    def update(self, record: T) -> Optional[T]: ...

    def delete(self, record_id: str) -> bool: ...

    def list(self) -> List[T]: ...


class InMemoryRepository(Generic[T]):
    """Process-local record store keyed by id, in insertion order."""

    def __init__(self, records: Optional[List[T]] = None) -> None:
        self.records: Dict[str, T] = {}
        for record in records or []:
            self.create(record)

    def create(self, record: T) -> T:
        if record.id in self.records:
            raise KeyError(f"Record {record.id} already exists")
        self.records[record.id] = record
        return record

    def get(self, record_id: str) -> Optional[T]:
        return self.records.get(record_id)

    def update(self, record: T) -> Optional[T]:
        if record.id not in self.records:
            return None
        self.records[record.id] = record
        return record

    def delete(self, record_id: str) -> bool:
        return self.records.pop(record_id, None) is not None

    def list(self) -> List[T]:
        return list(self.records.values())

    def clear(self) -> None:
        self.records.clear()
