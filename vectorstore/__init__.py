from .qdrant_client import NIL_POINT_ID, QdrantVectorStore

__all__ = ["NIL_POINT_ID", "QdrantVectorStore"]
