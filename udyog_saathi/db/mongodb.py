"""
MongoDB Connection Utility

MongoDB stores every entity of the marketplace, one collection each:
- users / businesses: Worker and Business accounts
- jobs / workerprofiles / instantservices: Listings shown in the feeds
- applications: Worker-to-business interest records (the notification list)
- messages: Chat lines between two users
"""
from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.database import Database
from pymongo.collection import Collection

from udyog_saathi.core.config import get_settings
from udyog_saathi.core.logging import get_logger

logger = get_logger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        settings = get_settings()
        _client = MongoClient(
            settings.mongodb_uri,
            maxPoolSize=settings.mongodb_max_pool_size,
            minPoolSize=settings.mongodb_min_pool_size,
            serverSelectionTimeoutMS=settings.mongodb_server_selection_timeout_ms,
            socketTimeoutMS=settings.mongodb_socket_timeout_ms,
        )
    return _client


def set_mongo_client(client: MongoClient) -> None:
    """Replace the shared client (used by tests and scripts)."""
    global _client, _db
    _client = client
    _db = None


def get_mongo_db() -> Database:
    """Get the marketplace database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by its name in COLLECTIONS."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "businesses": "businesses",
    "jobs": "jobs",
    "workers": "workerprofiles",
    "instant": "instantservices",
    "applications": "applications",
    "messages": "messages"
}


def init_mongo_indexes():
    """
    Create indexes for the query shapes the API uses.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Accounts are keyed by unique email
    db[COLLECTIONS["users"]].create_index("email", unique=True)
    db[COLLECTIONS["businesses"]].create_index("email", unique=True)

    # Owner lookups for the user-activity view
    db[COLLECTIONS["jobs"]].create_index([("ownerEmail", ASCENDING), ("_id", DESCENDING)])
    db[COLLECTIONS["workers"]].create_index([("email", ASCENDING), ("_id", DESCENDING)])
    db[COLLECTIONS["instant"]].create_index("ownerEmail")

    applications = db[COLLECTIONS["applications"]]
    applications.create_index("businessEmail")
    applications.create_index("applicantEmail")
    applications.create_index("status")
    applications.create_index([
        ("businessEmail", ASCENDING),
        ("applicantEmail", ASCENDING),
        ("timestamp", DESCENDING)
    ])

    db[COLLECTIONS["messages"]].create_index([
        ("senderEmail", ASCENDING),
        ("receiverEmail", ASCENDING),
        ("timestamp", ASCENDING)
    ])

    logger.info("MongoDB indexes created successfully")
