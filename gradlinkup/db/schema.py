"""
Relational schema for the four GradLinkUp tables.

profiles      - one row per signed-in user (id = identity provider user id)
companies     - organization metadata for company-role users (id = profile id)
internships   - postings owned by a company
applications  - one row per candidate/internship pair with a review status

List-valued columns hold JSON arrays: JSONB on PostgreSQL, TEXT elsewhere.
Timestamps are written by the application as UTC ISO-8601 strings.
"""

import logging

from sqlalchemy import text

from gradlinkup.db.postgres import engine, get_db_session

logger = logging.getLogger(__name__)

TABLES = ("applications", "internships", "companies", "profiles")


def _json_type() -> str:
    return "JSONB" if engine.dialect.name == "postgresql" else "TEXT"


def _timestamp_type() -> str:
    return "TIMESTAMPTZ" if engine.dialect.name == "postgresql" else "TEXT"


def schema_statements() -> list:
    """CREATE TABLE statements in dependency order."""
    json_type = _json_type()
    ts_type = _timestamp_type()
    return [
        f"""
        CREATE TABLE IF NOT EXISTS profiles (
            id TEXT PRIMARY KEY,
            role TEXT NOT NULL,
            full_name TEXT,
            qualifications TEXT,
            skills {json_type},
            location_preference TEXT,
            social_category TEXT,
            resume_url TEXT,
            created_at {ts_type},
            updated_at {ts_type}
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS companies (
            id TEXT PRIMARY KEY REFERENCES profiles (id),
            company_name TEXT NOT NULL,
            description TEXT,
            industry TEXT,
            size TEXT,
            website TEXT,
            logo_url TEXT,
            created_at {ts_type},
            updated_at {ts_type}
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS internships (
            id TEXT PRIMARY KEY,
            company_id TEXT REFERENCES companies (id),
            title TEXT NOT NULL,
            description TEXT NOT NULL,
            location TEXT,
            stipend NUMERIC,
            capacity INTEGER,
            required_skills {json_type},
            affirmative_action_tags {json_type},
            status TEXT,
            created_at {ts_type},
            updated_at {ts_type}
        )
        """,
        f"""
        CREATE TABLE IF NOT EXISTS applications (
            id TEXT PRIMARY KEY,
            candidate_id TEXT REFERENCES profiles (id),
            internship_id TEXT REFERENCES internships (id),
            status TEXT NOT NULL DEFAULT 'Applied',
            cover_letter TEXT,
            applied_at {ts_type},
            updated_at {ts_type}
        )
        """,
        "CREATE INDEX IF NOT EXISTS idx_internships_company ON internships (company_id)",
        "CREATE INDEX IF NOT EXISTS idx_internships_status ON internships (status)",
        "CREATE INDEX IF NOT EXISTS idx_applications_candidate ON applications (candidate_id)",
        "CREATE INDEX IF NOT EXISTS idx_applications_internship ON applications (internship_id)",
    ]


def init_schema():
    """
    Create tables and indexes if they don't exist.
    Call this once during app startup.
    """
    with get_db_session() as db:
        for statement in schema_statements():
            db.execute(text(statement))
    logger.info("Relational schema ready (%s)", engine.dialect.name)


def clear_tables():
    """Delete every row, children first. Used by tests and local resets."""
    with get_db_session() as db:
        for table in TABLES:
            db.execute(text(f"DELETE FROM {table}"))
