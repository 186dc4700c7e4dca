"""
MongoDB Connection Utility

MongoDB stores uploaded resume files in a GridFS bucket.
Each file is saved under its storage key
("{candidate_id}-resume-{timestamp}.{ext}") with the owning
candidate recorded in the file metadata.
"""
import logging

from gridfs import GridFSBucket
from pymongo import MongoClient
from pymongo.database import Database

from gradlinkup.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the file storage database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_resume_bucket() -> GridFSBucket:
    """GridFS bucket holding resume uploads."""
    return GridFSBucket(get_mongo_db(), bucket_name=settings.resume_bucket)


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
        logger.error(f"MongoDB connection failed: {e}")
        return False


def init_mongo_indexes():
    """
    Create indexes for resume lookups by candidate.
    Call this once during app startup.
    """
    db = get_mongo_db()
    db[f"{settings.resume_bucket}.files"].create_index([
        ("metadata.candidate_id", 1),
        ("uploadDate", -1)
    ])
    logger.info("MongoDB indexes created successfully")
