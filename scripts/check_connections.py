#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database and file storage connections are working.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from gradlinkup.core.config import get_settings
from gradlinkup.db.postgres import test_postgres_connection
from gradlinkup.db.mongodb import test_mongo_connection
from gradlinkup.db.schema import init_schema


def main():
    settings = get_settings()
    print("=" * 50)
    print("GRADLINKUP - CONNECTION CHECK")
    print("=" * 50)

    # Relational store
    print("\n[1] Testing database...")
    if settings.database_url:
        print(f"    URL: {settings.database_url.split('@')[-1]}")
    else:
        print(f"    URL: postgresql://{settings.postgres_user}:****@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_db}")
    if test_postgres_connection():
        print("    ✅ Database: CONNECTED")
        init_schema()
        print("    ✅ Tables: READY")
    else:
        print("    ❌ Database: FAILED")

    # File storage
    print("\n[2] Testing MongoDB (resume storage)...")
    print(f"    URI: {settings.mongodb_uri}")
    print(f"    Database: {settings.mongodb_db}, bucket: {settings.resume_bucket}")
    if test_mongo_connection():
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)


if __name__ == "__main__":
    main()
