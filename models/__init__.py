from .sync_result import CollectionResult, CollectionState, ScanPage, SyncSummary

__all__ = ["CollectionResult", "CollectionState", "ScanPage", "SyncSummary"]
