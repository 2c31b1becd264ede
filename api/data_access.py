"""
Data access layer for the companies collection.
Provides read-only access to MongoDB with a clean query interface.
"""

import logging
import math
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import Decimal128, ObjectId, json_util
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from .config import settings

logger = logging.getLogger(__name__)


def to_json_safe(value: Any) -> Any:
    """
    Convert BSON values in a stored document into plain JSON values.

    ObjectId becomes its hex string, Decimal128 a number. Non-finite
    numbers become None, datetime an ISO-8601 string. Other BSON-only types fall back
    to their extended-JSON form.
    """
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if value is None or isinstance(value, (str, bool, int)):
        return value
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal128):
        number = value.to_decimal()
        if not number.is_finite():
            return None
        return int(number) if number == number.to_integral_value() else float(number)
    if isinstance(value, datetime):
        return value.isoformat()
    return json_util.default(value)


class CompanyDataProvider:
    """
    Provides company documents from the document store.

    The provider owns one pooled MongoClient for the life of the process.
    Construct it explicitly, call open() once, share it by reference
    across handlers and close() it on shutdown. Pass `client` to inject
    an already-built client (tests use mongomock).
    """

    def __init__(
        self,
        uri: Optional[str] = None,
        database_name: Optional[str] = None,
        collection_name: Optional[str] = None,
        client: Optional[MongoClient] = None,
    ):
        """
        Args:
            uri: MongoDB connection string (defaults to config setting)
            database_name: Database holding the collection
            collection_name: Collection of company documents
            client: Pre-built client; when given, `uri` is ignored
        """
        self.uri = uri or settings.MONGODB_URI
        self.database_name = database_name or settings.MONGODB_DATABASE
        self.collection_name = collection_name or settings.MONGODB_COLLECTION
        self.client = client
        self.collection = None

    def open(self) -> "CompanyDataProvider":
        """Connect to the store. Safe to call more than once."""
        if self.collection is not None:
            return self
        try:
            if self.client is None:
                self.client = MongoClient(
                    self.uri,
                    serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS,
                )
            self.collection = self.client[self.database_name][self.collection_name]
        except PyMongoError as e:
            logger.error(f"Error connecting to MongoDB: {e}")
            raise
        logger.info(f"Using collection {self.database_name}.{self.collection_name}")
        return self

    def close(self):
        """Close the store connection."""
        if self.client is not None:
            self.client.close()
        self.client = None
        self.collection = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _coll(self):
        if self.collection is None:
            raise RuntimeError("CompanyDataProvider is not open")
        return self.collection

    def _find(self, query: Dict) -> List[Dict]:
        return [to_json_safe(doc) for doc in self._coll().find(query)]

    # ----------------------------------------------------------------
    # Range & Ranking
    # ----------------------------------------------------------------

    def get_by_headcount_range(self, min_headcount: int = 0, max_headcount: Optional[int] = None) -> List[Dict]:
        """
        Get companies whose headcount lies in [min_headcount, max_headcount].

        Args:
            min_headcount: Inclusive lower bound
            max_headcount: Inclusive upper bound, None for unbounded

        Returns:
            Matching documents, unordered
        """
        bounds = {"$gte": min_headcount}
        if max_headcount is not None:
            bounds["$lte"] = max_headcount
        return self._find({"headcount": bounds})

    def get_top_paid(self, limit: int) -> List[Dict]:
        """
        Get companies ordered by base salary, highest first.

        Documents without `salaryBand.base` sort after every numeric value
        (null and missing rank lowest in BSON order). Ties break on `_id`.

        Args:
            limit: Number of documents to return, must be positive
        """
        if limit < 1:
            raise ValueError(f"limit must be positive, got {limit}")
        cursor = (
            self._coll()
            .find({})
            .sort([("salaryBand.base", DESCENDING), ("_id", ASCENDING)])
            .limit(limit)
        )
        return [to_json_safe(doc) for doc in cursor]

    # ----------------------------------------------------------------
    # Matching
    # ----------------------------------------------------------------

    def get_by_location(self, location: str) -> List[Dict]:
        """Case-insensitive exact match on `location`."""
        pattern = f"^{re.escape(location)}$"
        return self._find({"location": {"$regex": pattern, "$options": "i"}})

    def get_by_skill(self, skill: str) -> List[Dict]:
        """Case-insensitive exact match on any entry of `hiringCriteria.skills`."""
        pattern = f"^{re.escape(skill)}$"
        return self._find({"hiringCriteria.skills": {"$regex": pattern, "$options": "i"}})

    def get_by_benefit(self, benefit: str) -> List[Dict]:
        """Case-insensitive substring match on any entry of `benefits`."""
        pattern = re.escape(benefit)
        return self._find({"benefits": {"$regex": pattern, "$options": "i"}})

    # ----------------------------------------------------------------
    # Stats
    # ----------------------------------------------------------------

    def count(self) -> int:
        """Number of documents in the collection right now."""
        return self._coll().count_documents({})
