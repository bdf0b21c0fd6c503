from typing import Optional


class SyncError(Exception):
    """Base class for failures that abort a sync run."""


class TransientStoreError(SyncError):
    def __init__(self, operation: str, message: str, collection: Optional[str] = None):
        self.operation = operation
        self.collection = collection
        target = f" on {collection}" if collection else ""
        super().__init__(f"{operation}{target} failed: {message}")


class MalformedCursorError(SyncError):
    def __init__(self, collection: str, value, detail: str = "scroll cursor is not a point UUID"):
        self.collection = collection
        self.value = value
        super().__init__(f"Cannot continue scan of {collection}: {detail} ({value!r})")


class SyncCancelled(SyncError):
    def __init__(self, collection: Optional[str] = None):
        self.collection = collection
        where = f" while processing {collection}" if collection else ""
        super().__init__(f"Sync cancelled{where}")
