from .orphan_reconciler import OrphanReconciler

__all__ = ["OrphanReconciler"]
