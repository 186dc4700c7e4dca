"""
Database module - relational store and MongoDB file storage connections.
"""
from gradlinkup.db.postgres import get_db_session, test_postgres_connection
from gradlinkup.db.mongodb import get_mongo_db, test_mongo_connection

__all__ = [
    "get_db_session",
    "test_postgres_connection",
    "get_mongo_db",
    "test_mongo_connection"
]
