from .store import WorkflowStore

__all__ = ["WorkflowStore"]
