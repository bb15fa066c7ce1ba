"""
Portfolio Admin

Content management backend for an artist's portfolio site.
"""

import importlib.metadata

__version__ = importlib.metadata.version("portfolio-admin")

from .content import (
    Artwork,
    BulkResult,
    CollectionService,
    ExhibitionEntry,
    ExhibitionKey,
    ExhibitionService,
)
from .errors import AppError, ErrorType

__all__ = [
    "AppError",
    "Artwork",
    "BulkResult",
    "CollectionService",
    "ErrorType",
    "ExhibitionEntry",
    "ExhibitionKey",
    "ExhibitionService",
]
