"""
Database
- Implements data persistence strategies
- Contains database-specific logic
- Provides the MongoDB connection and document helpers used by the repositories
"""

from .mongo import (
    MongoDatabase,
    encode_refs,
    normalize_document,
    to_document,
    to_object_id,
)

__all__ = [
    "MongoDatabase",
    "encode_refs",
    "normalize_document",
    "to_document",
    "to_object_id",
]
