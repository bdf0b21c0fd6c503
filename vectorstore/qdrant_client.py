from typing import Iterable, Optional
from uuid import UUID
from qdrant_client import QdrantClient
from qdrant_client.models import PointIdsList
from models import ScanPage
from utils.errors import MalformedCursorError, TransientStoreError


# Qdrant's scroll API needs a seed offset; the nil UUID sorts before every point id.
NIL_POINT_ID = "00000000-0000-0000-0000-000000000000"
DEFAULT_PAGE_SIZE = 1000


class QdrantVectorStore:
    def __init__(self, url: Optional[str] = None, api_key: Optional[str] = None, timeout: int = 60, client: Optional[QdrantClient] = None):
        self.url = url
        self.client = client or QdrantClient(url=url, api_key=api_key, timeout=timeout)

    def list_collections(self) -> list[str]:
        try:
            collections = self.client.get_collections().collections
        except Exception as e:
            raise TransientStoreError("list collections", str(e)) from e
        return [c.name for c in collections]

    def scroll_point_ids(self, collection: str, cursor: Optional[str] = None, page_size: int = DEFAULT_PAGE_SIZE) -> ScanPage:
        """Read one page of point ids. cursor=None starts a fresh scan; next_cursor=None ends it."""
        offset = cursor if cursor is not None else NIL_POINT_ID

        try:
            records, next_offset = self.client.scroll(
                collection_name=collection,
                offset=offset,
                limit=page_size,
                with_payload=False,
                with_vectors=False,
            )
        except Exception as e:
            raise TransientStoreError("scroll", str(e), collection) from e

        point_ids = [self._parse_point_id(collection, record.id) for record in records]

        next_cursor = None
        if next_offset is not None:
            next_cursor = str(self._parse_cursor(collection, next_offset))

        return ScanPage(point_ids=point_ids, next_cursor=next_cursor)

    def delete_points(self, collection: str, point_ids: Iterable[UUID]) -> int:
        """Delete points by id. Ids missing from the collection are ignored by Qdrant."""
        ids = [str(point_id) for point_id in point_ids]
        if not ids:
            return 0

        try:
            self.client.delete(
                collection_name=collection,
                points_selector=PointIdsList(points=ids),
                wait=True,
            )
        except Exception as e:
            print(f"  [{collection}] ✗ Failed to delete {len(ids)} orphan point(s): {e}")
            raise TransientStoreError("delete points", str(e), collection) from e

        return len(ids)

    @staticmethod
    def _parse_cursor(collection: str, value) -> UUID:
        return _as_uuid(collection, value, "scroll cursor is not a point UUID")

    @staticmethod
    def _parse_point_id(collection: str, value) -> UUID:
        return _as_uuid(collection, value, "scan returned a point id that is not a UUID")


def _as_uuid(collection: str, value, detail: str) -> UUID:
    if isinstance(value, UUID):
        return value
    if isinstance(value, str):
        try:
            return UUID(value)
        except ValueError:
            pass
    raise MalformedCursorError(collection, value, detail=detail)
