"""
MongoDB Document Store

MongoDB stores:
- jobs: job postings created by admins
- applications: candidate submissions (job_id + email is unique by convention only)
- users: admin accounts (bcrypt password hashes)
- revoked_tokens: JWT ids invalidated by sign-out

Every pymongo failure is re-raised as BackendError so callers only ever see
the job board's own error types.
"""
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from app.core.errors import BackendError, DuplicateRecordError

logger = logging.getLogger(__name__)

# Collection name constants (avoid typos)
COLLECTIONS = {
    "jobs": "jobs",
    "applications": "applications",
    "users": "users",
    "revoked_tokens": "revoked_tokens",
}

ORDER = {"asc": ASCENDING, "desc": DESCENDING}


def to_object_id(doc_id: str) -> Optional[ObjectId]:
    """Parse a string id; malformed ids map to None (treated as not found)."""
    try:
        return ObjectId(doc_id)
    except (InvalidId, TypeError):
        return None


class DocumentStore:
    """
    Thin wrapper over a pymongo Database.

    Operations:
    - insert: insert-with-generated-id, returns the id as a string
    - get: get-by-id
    - query: equality filter with optional ordering
    - delete: delete-by-id
    - server_timestamp: creation time assigned by the store layer
    """

    def __init__(
        self,
        database: Database,
        client: Optional[MongoClient] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.database = database
        self.client = client
        self.clock = clock

    @classmethod
    def connect(cls, uri: str, db_name: str) -> "DocumentStore":
        """Open a client (connection pooling handled internally by pymongo)."""
        client = MongoClient(uri)
        return cls(client[db_name], client=client)

    def collection(self, name: str) -> Collection:
        return self.database[COLLECTIONS[name]]

    def server_timestamp(self) -> datetime:
        # Mongo keeps millisecond precision; truncate so reads compare equal
        now = self.clock()
        return now.replace(microsecond=(now.microsecond // 1000) * 1000)

    def insert(self, collection: str, data: Dict[str, Any]) -> str:
        try:
            result = self.collection(collection).insert_one(dict(data))
        except DuplicateKeyError as e:
            logger.warning(f"Insert into {collection} hit a unique index: {e}")
            raise DuplicateRecordError() from e
        except PyMongoError as e:
            logger.error(f"Insert into {collection} failed: {e}")
            raise BackendError() from e
        return str(result.inserted_id)

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        oid = to_object_id(doc_id)
        if oid is None:
            return None
        try:
            return self.collection(collection).find_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Lookup in {collection} failed: {e}")
            raise BackendError() from e

    def query(
        self,
        collection: str,
        equals: Optional[Dict[str, Any]] = None,
        order_by: Optional[Tuple[str, str]] = None,
        limit: int = 0,
    ) -> List[dict]:
        """
        Fetch documents whose fields equal the given values.

        Example:
            store.query("applications", {"job_id": job_id}, order_by=("submitted_at", "desc"))
        """
        sort = [(order_by[0], ORDER[order_by[1]])] if order_by else None
        try:
            cursor = self.collection(collection).find(equals or {}, sort=sort, limit=limit)
            return list(cursor)
        except PyMongoError as e:
            logger.error(f"Query on {collection} failed: {e}")
            raise BackendError() from e

    def exists(self, collection: str, equals: Dict[str, Any]) -> bool:
        return bool(self.query(collection, equals, limit=1))

    def delete(self, collection: str, doc_id: str) -> bool:
        oid = to_object_id(doc_id)
        if oid is None:
            return False
        try:
            result = self.collection(collection).delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error(f"Delete from {collection} failed: {e}")
            raise BackendError() from e
        return result.deleted_count > 0

    def ping(self) -> bool:
        """
        Test if MongoDB is reachable.
        Returns True if connection successful, False otherwise.
        """
        try:
            self.database.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB connection failed: {e}")
            return False

    def init_indexes(self):
        """
        Create indexes for the queries we run.
        Call this once during app startup.
        """
        # Duplicate check and per-job listing
        self.collection("applications").create_index([
            ("job_id", ASCENDING),
            ("email", ASCENDING)
        ])
        self.collection("applications").create_index([
            ("job_id", ASCENDING),
            ("submitted_at", DESCENDING)
        ])
        self.collection("jobs").create_index("created_at")
        self.collection("users").create_index("email", unique=True)
        self.collection("revoked_tokens").create_index("jti")

        logger.info("MongoDB indexes created successfully")

    def close(self):
        if self.client is not None:
            self.client.close()
