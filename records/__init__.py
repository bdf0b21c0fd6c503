from .point_registry import PointRegistry

__all__ = ["PointRegistry"]
