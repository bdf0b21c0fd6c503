from .errors import MalformedCursorError, SyncCancelled, SyncError, TransientStoreError
from .retry import call_with_retry

__all__ = [
    "MalformedCursorError",
    "SyncCancelled",
    "SyncError",
    "TransientStoreError",
    "call_with_retry",
]
