"""
MongoDB Service - CRUD operations for document collections.

Collections in this database:
1. users / businesses  - Worker and Business accounts (unique email)
2. jobs                - Job postings with likes and comments
3. workerprofiles      - Worker skill postings with likes and comments
4. instantservices     - Standing offers of on-demand labor
5. applications        - Worker-to-business interest records
6. messages            - Chat lines between two users

No schema logic lives here beyond field presence; validation happens
in the request schemas.
"""

from datetime import datetime
from typing import Optional, List, Union
from bson import ObjectId
from bson.errors import InvalidId
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from udyog_saathi.core.config import get_settings
from udyog_saathi.db.mongodb import get_collection, COLLECTIONS
from udyog_saathi.models.accounts import (
    AccountRole, ACCOUNT_COLLECTION_KEYS, BusinessAccount, WorkerAccount, parse_account
)


# ============================================================
# HELPER: Convert ObjectId to string for JSON serialization
# ============================================================

def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    return doc


def serialize_docs(docs: list) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a path id; malformed ids resolve to None instead of raising."""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


# ============================================================
# ACCOUNTS (users + businesses)
# ============================================================

class AccountService:
    """
    Account storage for one role.
    The role picks the collection once; callers never branch on it again.
    """

    def __init__(self, role: AccountRole):
        self.role = role
        self.collection: Collection = get_collection(COLLECTIONS[ACCOUNT_COLLECTION_KEYS[role]])

    def create(self, doc: dict) -> str:
        """Insert an account. Raises DuplicateKeyError if the email is taken."""
        doc = {**doc, "role": self.role.value}
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def get_credentials(self, email: str) -> Optional[dict]:
        """Fetch the raw document including the password hash."""
        return serialize_doc(self.collection.find_one({"email": email}))

    def get_by_email(self, email: str) -> Optional[Union[WorkerAccount, BusinessAccount]]:
        doc = self.collection.find_one({"email": email}, {"password": 0})
        if doc is None:
            return None
        return parse_account({"role": self.role.value, **serialize_doc(doc)})

    def update_profile(self, email: str, fields: dict) -> Optional[Union[WorkerAccount, BusinessAccount]]:
        """Apply $set on the account and return the updated variant."""
        if not fields:
            return self.get_by_email(email)
        doc = self.collection.find_one_and_update(
            {"email": email},
            {"$set": fields},
            projection={"password": 0},
            return_document=ReturnDocument.AFTER
        )
        if doc is None:
            return None
        return parse_account({"role": self.role.value, **serialize_doc(doc)})


def account_store_for(role: AccountRole) -> AccountService:
    return AccountService(role)


# ============================================================
# LISTINGS (jobs, worker profiles, instant services)
# ============================================================

class ListingService:
    """
    Handles one listing collection.

    owner_field differs per collection: jobs and instant services are
    keyed by ownerEmail, worker profiles by email.
    """

    SOCIAL_FIELDS = {"likes": 0, "comments": 0}

    def __init__(self, collection_key: str, owner_field: str, social: bool = True):
        self.collection: Collection = get_collection(COLLECTIONS[collection_key])
        self.owner_field = owner_field
        self.social = social

    def insert(self, doc: dict) -> str:
        now = datetime.utcnow()
        doc = dict(doc)
        if self.social:
            doc.setdefault("likes", [])
            doc.setdefault("comments", [])
            doc.update({"createdAt": now, "updatedAt": now})
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def list_recent(self, limit: Optional[int] = None) -> List[dict]:
        """Capped feed read."""
        settings = get_settings()
        limit = limit or settings.feed_limit
        cursor = self.collection.find({}).limit(limit).max_time_ms(settings.feed_query_timeout_ms)
        return serialize_docs(list(cursor))

    def list_by_owner(self, email: str) -> List[dict]:
        """Owned listings without the social sub-objects."""
        projection = self.SOCIAL_FIELDS if self.social else None
        cursor = self.collection.find({self.owner_field: email}, projection).max_time_ms(
            get_settings().query_timeout_ms
        )
        return serialize_docs(list(cursor))

    def delete(self, listing_id: str) -> bool:
        """Delete by id; a missing or malformed id is simply a no-op."""
        oid = to_object_id(listing_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count > 0

    def add_comment(self, listing_id: str, user_name: str, text: str) -> bool:
        oid = to_object_id(listing_id)
        if oid is None:
            return False
        comment = {"userName": user_name, "text": text, "timestamp": datetime.utcnow()}
        result = self.collection.update_one(
            {"_id": oid},
            {"$push": {"comments": comment}, "$set": {"updatedAt": datetime.utcnow()}}
        )
        return result.matched_count > 0

    def toggle_like(self, listing_id: str, email: str) -> Optional[int]:
        """
        Add the email to likes, or remove it if already present.
        Returns the new like count, or None if the listing does not exist.
        """
        oid = to_object_id(listing_id)
        if oid is None:
            return None
        doc = self.collection.find_one({"_id": oid}, {"likes": 1})
        if doc is None:
            return None
        op = "$pull" if email in doc.get("likes", []) else "$addToSet"
        updated = self.collection.find_one_and_update(
            {"_id": oid},
            {op: {"likes": email}},
            projection={"likes": 1},
            return_document=ReturnDocument.AFTER
        )
        return len(updated.get("likes", [])) if updated else None

    def count(self) -> int:
        return self.collection.count_documents({})

    def has_any(self) -> bool:
        """Whether at least one listing can be read within the diagnostic time limit."""
        cursor = self.collection.find({}).limit(1).max_time_ms(get_settings().diagnostic_query_timeout_ms)
        return next(iter(cursor), None) is not None


class JobService(ListingService):
    def __init__(self):
        super().__init__("jobs", owner_field="ownerEmail")


class WorkerProfileService(ListingService):
    def __init__(self):
        super().__init__("workers", owner_field="email")


class InstantServiceService(ListingService):
    def __init__(self):
        super().__init__("instant", owner_field="ownerEmail", social=False)


def get_listing_service(listing_type: str) -> Optional[ListingService]:
    """Map the delete-path type segment to its service."""
    services = {
        "worker": WorkerProfileService,
        "job": JobService,
        "instant": InstantServiceService,
    }
    service_cls = services.get(listing_type)
    return service_cls() if service_cls else None


# ============================================================
# APPLICATIONS COLLECTION
# ============================================================

class ApplicationService:
    """
    Raw storage for applications.
    Status rules live in services.application_workflow.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["applications"])

    def insert(self, doc: dict) -> str:
        doc = {**doc, "status": "pending", "timestamp": datetime.utcnow()}
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def get_by_id(self, application_id: str) -> Optional[dict]:
        oid = to_object_id(application_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}))

    def set_status_if(self, application_id: str, expected: str, new_status: str) -> Optional[dict]:
        """
        Conditional update: only flips the status if it still equals expected.
        Returns the updated document, or None if nothing matched.
        """
        oid = to_object_id(application_id)
        if oid is None:
            return None
        doc = self.collection.find_one_and_update(
            {"_id": oid, "status": expected},
            {"$set": {"status": new_status}},
            return_document=ReturnDocument.AFTER
        )
        return serialize_doc(doc)

    def find_for_email(self, email: str, limit: Optional[int] = None) -> List[dict]:
        """Every application where email is the business or the applicant, newest first."""
        settings = get_settings()
        limit = limit or settings.notification_limit
        cursor = self.collection.find(
            {"$or": [{"businessEmail": email}, {"applicantEmail": email}]}
        ).sort([("timestamp", DESCENDING), ("_id", DESCENDING)]).limit(limit)
        cursor = cursor.max_time_ms(settings.query_timeout_ms)
        return serialize_docs(list(cursor))

    def clear_for_email(self, email: str) -> int:
        result = self.collection.delete_many(
            {"$or": [{"businessEmail": email}, {"applicantEmail": email}]}
        )
        return result.deleted_count


# ============================================================
# MESSAGES COLLECTION
# ============================================================

class MessageService:
    """
    Chat lines. Immutable once written; read by unordered pair.
    """

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["messages"])

    def insert(self, sender_email: str, receiver_email: str, text: str) -> str:
        doc = {
            "senderEmail": sender_email,
            "receiverEmail": receiver_email,
            "text": text,
            "status": "sent",
            "timestamp": datetime.utcnow()
        }
        result = self.collection.insert_one(doc)
        return str(result.inserted_id)

    def history(self, user_a: str, user_b: str, limit: Optional[int] = None) -> List[dict]:
        """
        Most recent messages between the pair, returned oldest first.
        Anything older than the cap is not reachable.
        """
        settings = get_settings()
        limit = limit or settings.chat_history_limit
        cursor = self.collection.find({
            "$or": [
                {"senderEmail": user_a, "receiverEmail": user_b},
                {"senderEmail": user_b, "receiverEmail": user_a}
            ]
        }).sort([("timestamp", DESCENDING), ("_id", DESCENDING)]).limit(limit)
        cursor = cursor.max_time_ms(settings.query_timeout_ms)
        docs = list(cursor)
        docs.reverse()
        return serialize_docs(docs)
