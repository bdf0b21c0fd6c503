import signal
import sys
import threading
import time
from dotenv import load_dotenv
from sqlalchemy.exc import ArgumentError
from config import SyncConfig
from models import SyncSummary
from records import PointRegistry
from reconciliation import OrphanReconciler
from utils import SyncCancelled, SyncError
from vectorstore import QdrantVectorStore


# ANSI color codes
BLUE = '\033[34m'
CYAN = '\033[36m'
GREEN = '\033[32m'
YELLOW = '\033[33m'
RED = '\033[31m'
RESET = '\033[0m'

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2
EXIT_CANCELLED = 130


def install_signal_handlers(cancel_event: threading.Event) -> dict:
    """Turn SIGINT/SIGTERM into a cooperative stop. Returns the previous handlers."""
    def _handle(signum, frame):
        print(f"{YELLOW}Received signal {signum}, stopping after the current page...{RESET}")
        cancel_event.set()

    previous = {}
    for sig in (signal.SIGINT, signal.SIGTERM):
        previous[sig] = signal.getsignal(sig)
        signal.signal(sig, _handle)
    return previous


def restore_signal_handlers(previous: dict):
    for sig, handler in previous.items():
        if handler is not None:
            signal.signal(sig, handler)


def print_summary(summary: SyncSummary, elapsed: float):
    print(f"\n=== Sync Complete ===")
    print(f"Collections: {len(summary.collections)}")
    print(f"Points scanned: {summary.points_scanned}")
    print(f"Orphans found: {summary.orphans_found}")
    if summary.dry_run:
        print("Orphans deleted: 0 (dry run)")
    else:
        print(f"Orphans deleted: {summary.orphans_deleted}")
    print(f"Elapsed: {elapsed:.1f}s")


def main() -> int:
    load_dotenv()

    try:
        config = SyncConfig()
    except ValueError as e:
        print(f"{RED}ERROR:{RESET} {e}")
        return EXIT_CONFIG

    is_valid, error = config.validate()
    if not is_valid:
        print(f"{RED}ERROR:{RESET} {error}")
        return EXIT_CONFIG

    print(f"{BLUE}============================================================{RESET}")
    print(f"{CYAN}  Qdrant Orphan Sync{RESET}")
    print(f"{BLUE}------------------------------------------------------------{RESET}")
    print(f"{GREEN}  {config.describe()}{RESET}")
    print(f"{BLUE}============================================================{RESET}")

    try:
        registry = PointRegistry.from_url(
            config.database_url,
            pool_size=config.db_pool_size,
            table_name=config.point_table,
            id_column=config.point_id_column,
        )
    except ArgumentError as e:
        print(f"{RED}ERROR:{RESET} Invalid DATABASE_URL: {e}")
        return EXIT_CONFIG

    vector_store = QdrantVectorStore(
        url=config.qdrant_url,
        api_key=config.qdrant_api_key,
        timeout=config.qdrant_timeout,
    )

    cancel_event = threading.Event()
    previous_handlers = install_signal_handlers(cancel_event)
    reconciler = OrphanReconciler.from_config(config, vector_store, registry, cancel_event=cancel_event)

    start = time.time()
    try:
        summary = reconciler.run(config.collections or None)
    except SyncCancelled as e:
        print(f"{YELLOW}{e}. Re-run the job to finish reconciliation.{RESET}")
        return EXIT_CANCELLED
    except SyncError as e:
        print(f"{RED}ERROR:{RESET} {e}")
        return EXIT_FAILURE
    finally:
        restore_signal_handlers(previous_handlers)
        registry.dispose()

    print_summary(summary, time.time() - start)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
