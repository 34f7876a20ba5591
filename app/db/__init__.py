"""
Database module - MongoDB document store, blob store and the backend context.
"""
from app.db.mongodb import DocumentStore, COLLECTIONS
from app.db.blob_store import LocalBlobStore

__all__ = [
    "DocumentStore",
    "COLLECTIONS",
    "LocalBlobStore",
]
