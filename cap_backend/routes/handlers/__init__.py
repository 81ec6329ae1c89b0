"""
Route handlers.
"""
from .history import register_history_routes
from .models import register_model_routes
from .prompt import register_prompt_routes
from .root import register_root_routes
from .workflows import register_workflow_routes

__all__ = [
    "register_history_routes",
    "register_model_routes",
    "register_prompt_routes",
    "register_root_routes",
    "register_workflow_routes",
]
