import threading
from typing import Callable, Optional, TypeVar
from concurrent.futures import ThreadPoolExecutor, as_completed
from config import SyncConfig
from models import CollectionResult, CollectionState, ScanPage, SyncSummary
from records import PointRegistry
from utils import MalformedCursorError, SyncCancelled, call_with_retry
from vectorstore import QdrantVectorStore
from vectorstore.qdrant_client import DEFAULT_PAGE_SIZE


T = TypeVar("T")


class OrphanReconciler:
    """
    Deletes Qdrant points whose id has no row in the system of record.

    Each collection is scanned page by page in scroll order. A page's ids are
    checked against the registry in one query and the missing ones are deleted
    before the next page is requested. Any collaborator failure aborts the run.
    """

    def __init__(
        self,
        vector_store: QdrantVectorStore,
        registry: PointRegistry,
        page_size: int = DEFAULT_PAGE_SIZE,
        workers: int = 1,
        max_retries: int = 0,
        dry_run: bool = False,
        cancel_event: Optional[threading.Event] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.vector_store = vector_store
        self.registry = registry
        self.page_size = page_size
        self.workers = max(1, workers)
        self.max_retries = max(0, max_retries)
        self.dry_run = dry_run
        self.cancel_event = cancel_event or threading.Event()
        self._abort = threading.Event()
        self._retry_kwargs = {"sleep": sleep} if sleep else {}

    @classmethod
    def from_config(cls, config: SyncConfig, vector_store: QdrantVectorStore, registry: PointRegistry, cancel_event: Optional[threading.Event] = None) -> "OrphanReconciler":
        return cls(
            vector_store,
            registry,
            page_size=config.page_size,
            workers=config.workers,
            max_retries=config.max_retries,
            dry_run=config.dry_run,
            cancel_event=cancel_event,
        )

    def _call(self, fn: Callable[[], T], label: str) -> T:
        return call_with_retry(fn, max_retries=self.max_retries, label=label, **self._retry_kwargs)

    def _check_cancelled(self, collection: str):
        if self.cancel_event.is_set() or self._abort.is_set():
            raise SyncCancelled(collection)

    def reconcile_collection(self, collection: str) -> CollectionResult:
        result = CollectionResult(collection=collection)
        cursor: Optional[str] = None

        print(f"[{collection}] Starting scan")

        while True:
            self._check_cancelled(collection)
            result.state = CollectionState.SCANNING

            page: ScanPage = self._call(
                lambda: self.vector_store.scroll_point_ids(collection, cursor, self.page_size),
                f"[{collection}] scroll",
            )
            result.pages_scanned += 1
            result.points_scanned += len(page.point_ids)

            if page.point_ids:
                batch = set(page.point_ids)
                known = self._call(lambda: self.registry.exists(batch), f"[{collection}] point lookup")
                orphans = batch - known

                if orphans:
                    result.orphans_found += len(orphans)
                    print(f"[{collection}] Page {result.pages_scanned}: {len(orphans)} orphan point(s) of {len(batch)}")

                    if not self.dry_run:
                        result.state = CollectionState.PRUNING
                        result.orphans_deleted += self._call(
                            lambda: self.vector_store.delete_points(collection, orphans),
                            f"[{collection}] delete",
                        )

            if page.next_cursor is not None and page.next_cursor == cursor:
                raise MalformedCursorError(collection, cursor, detail="scroll cursor did not advance")

            cursor = page.next_cursor
            if cursor is None:
                break

        result.state = CollectionState.DONE
        pruned = "0 pruned (dry run)" if self.dry_run else f"{result.orphans_deleted} pruned"
        print(
            f"[{collection}] Done: {result.points_scanned} points in {result.pages_scanned} page(s), "
            f"{result.orphans_found} orphan(s) found, {pruned}"
        )
        return result

    def run(self, collections: Optional[list[str]] = None) -> SyncSummary:
        """Reconcile every hosted collection, or only those named in collections."""
        self._abort.clear()
        hosted = self._call(self.vector_store.list_collections, "list collections")

        if collections:
            missing = [name for name in collections if name not in hosted]
            for name in missing:
                print(f"Warning: collection {name} not found in Qdrant, skipping")
            names = [name for name in hosted if name in collections]
        else:
            names = hosted

        print(f"Reconciling {len(names)} collection(s) with {min(self.workers, max(1, len(names)))} worker(s)")

        summary = SyncSummary(dry_run=self.dry_run)

        if self.workers == 1 or len(names) <= 1:
            for name in names:
                summary.collections.append(self.reconcile_collection(name))
            return summary

        results = {}
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {executor.submit(self.reconcile_collection, name): name for name in names}
            try:
                for future in as_completed(futures):
                    results[futures[future]] = future.result()
            except BaseException:
                # Stop the other workers at their next page boundary.
                self._abort.set()
                for future in futures:
                    future.cancel()
                raise

        summary.collections = [results[name] for name in names]
        return summary
