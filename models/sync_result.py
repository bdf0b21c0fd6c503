from typing import Optional
from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID


class CollectionState(str, Enum):
    SCANNING = "SCANNING"
    PRUNING = "PRUNING"
    DONE = "DONE"


@dataclass
class ScanPage:
    point_ids: list[UUID]
    next_cursor: Optional[str] = None

    @property
    def is_last(self) -> bool:
        return self.next_cursor is None


@dataclass
class CollectionResult:
    collection: str
    pages_scanned: int = 0
    points_scanned: int = 0
    orphans_found: int = 0
    orphans_deleted: int = 0
    state: CollectionState = CollectionState.SCANNING


@dataclass
class SyncSummary:
    collections: list[CollectionResult] = field(default_factory=list)
    dry_run: bool = False

    @property
    def orphans_found(self) -> int:
        return sum(r.orphans_found for r in self.collections)

    @property
    def orphans_deleted(self) -> int:
        return sum(r.orphans_deleted for r in self.collections)

    @property
    def points_scanned(self) -> int:
        return sum(r.points_scanned for r in self.collections)
