"""
Database package for Portfolio Admin.
"""

from .audit_models import AuditLogModel
from .base import Base, get_db, get_engine, get_session_local, init_database
from .models import ArtworkModel, BlogModel, MediaModel, PageModel, PerformanceModel

__all__ = [
    "ArtworkModel",
    "AuditLogModel",
    "Base",
    "BlogModel",
    "MediaModel",
    "PageModel",
    "PerformanceModel",
    "get_db",
    "get_engine",
    "get_session_local",
    "init_database",
]
