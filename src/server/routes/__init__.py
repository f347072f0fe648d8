"""Route registration helpers."""

from .dashboard import register_dashboard_routes
from .entries import register_entry_routes
from .functions import register_function_routes
from .resumes import register_resume_routes

__all__ = [
    "register_dashboard_routes",
    "register_entry_routes",
    "register_function_routes",
    "register_resume_routes",
]
