"""
Record Service - CRUD operations for the four relational tables.

Tables:
1. profiles      - put (create-or-overwrite by id)
2. companies     - put (create-or-overwrite by id)
3. internships   - insert (create-only, a duplicate id fails)
4. applications  - insert (create-only)

put vs insert:
- put() is an upsert: INSERT ... ON CONFLICT (id) DO UPDATE
- insert() never overwrites; a conflicting key raises IntegrityError
"""

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from sqlalchemy import bindparam, text

from gradlinkup.db.postgres import get_db_session, execute_raw_sql

logger = logging.getLogger(__name__)


# ============================================================
# HELPERS
# ============================================================

def utc_now() -> str:
    """Current UTC time as ISO-8601 text (sortable across dialects)."""
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return str(uuid.uuid4())


def encode_list(values) -> str:
    return json.dumps(list(values or []))


def decode_list(value) -> List[str]:
    """JSONB columns come back decoded, TEXT columns as a JSON string."""
    if value is None:
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    return list(value) if isinstance(value, list) else []


def as_float(value) -> Optional[float]:
    return float(value) if value is not None else None


def _upsert(table: str, row: Dict[str, Any]) -> None:
    columns = list(row.keys())
    updates = [c for c in columns if c not in ("id", "created_at")]
    sql = (
        f"INSERT INTO {table} ({', '.join(columns)}) "
        f"VALUES ({', '.join(':' + c for c in columns)}) "
        f"ON CONFLICT (id) DO UPDATE SET "
        + ", ".join(f"{c} = EXCLUDED.{c}" for c in updates)
    )
    with get_db_session() as db:
        db.execute(text(sql), row)


def _insert(table: str, row: Dict[str, Any]) -> None:
    columns = list(row.keys())
    sql = (
        f"INSERT INTO {table} ({', '.join(columns)}) "
        f"VALUES ({', '.join(':' + c for c in columns)})"
    )
    with get_db_session() as db:
        db.execute(text(sql), row)


# ============================================================
# PROFILES TABLE
# ============================================================

class ProfileRecordService:
    """One row per signed-in user, keyed by identity id."""

    def get(self, profile_id: str) -> Optional[dict]:
        rows = execute_raw_sql("""
            SELECT id, role, full_name, qualifications, skills, location_preference,
                   social_category, resume_url, created_at, updated_at
            FROM profiles WHERE id = :id
        """, {"id": profile_id})
        if not rows:
            return None
        row = rows[0]
        row["skills"] = decode_list(row["skills"])
        return row

    def get_role(self, profile_id: str) -> Optional[str]:
        rows = execute_raw_sql("SELECT role FROM profiles WHERE id = :id", {"id": profile_id})
        return rows[0]["role"] if rows else None

    def put(self, profile: Dict[str, Any]) -> None:
        """
        Create or overwrite a profile row.
        Only the given columns are written on conflict.
        """
        row = dict(profile)
        if "skills" in row:
            row["skills"] = encode_list(row["skills"])
        now = utc_now()
        row.setdefault("created_at", now)
        row["updated_at"] = now
        _upsert("profiles", row)

    def count(self, profile_id: str) -> int:
        rows = execute_raw_sql("SELECT COUNT(*) AS n FROM profiles WHERE id = :id", {"id": profile_id})
        return rows[0]["n"]


# ============================================================
# COMPANIES TABLE
# ============================================================

class CompanyRecordService:
    """Organization metadata for company-role users (id = profile id)."""

    def get(self, company_id: str) -> Optional[dict]:
        rows = execute_raw_sql("""
            SELECT id, company_name, description, industry, size, website, logo_url,
                   created_at, updated_at
            FROM companies WHERE id = :id
        """, {"id": company_id})
        return rows[0] if rows else None

    def put(self, company: Dict[str, Any]) -> None:
        row = dict(company)
        now = utc_now()
        row.setdefault("created_at", now)
        row["updated_at"] = now
        _upsert("companies", row)


# ============================================================
# INTERNSHIPS TABLE
# ============================================================

class InternshipRecordService:
    """Internship postings. Created with insert(), never upserted."""

    def insert(self, internship: Dict[str, Any]) -> dict:
        row = dict(internship)
        row.setdefault("id", new_id())
        now = utc_now()
        row.setdefault("created_at", now)
        row.setdefault("updated_at", now)
        stored = dict(row)
        for field in ("required_skills", "affirmative_action_tags"):
            stored[field] = encode_list(row.get(field))
        _insert("internships", stored)
        logger.info("Inserted internship %s for company %s", row["id"], row.get("company_id"))
        return row

    def get(self, internship_id: str) -> Optional[dict]:
        rows = execute_raw_sql("""
            SELECT id, company_id, title, description, location, stipend, capacity,
                   required_skills, affirmative_action_tags, status, created_at, updated_at
            FROM internships WHERE id = :id
        """, {"id": internship_id})
        if not rows:
            return None
        row = rows[0]
        row["stipend"] = as_float(row["stipend"])
        row["required_skills"] = decode_list(row["required_skills"])
        row["affirmative_action_tags"] = decode_list(row["affirmative_action_tags"])
        return row

    def list_active(self, limit: int) -> List[dict]:
        """First `limit` active postings with the owning company's name."""
        rows = execute_raw_sql(f"""
            SELECT i.id, i.title, i.description, i.location, i.stipend, c.company_name
            FROM internships i LEFT JOIN companies c ON i.company_id = c.id
            WHERE i.status = 'active'
            ORDER BY i.created_at DESC
            LIMIT {int(limit)}
        """)
        for r in rows:
            r["stipend"] = as_float(r["stipend"])
        return rows

    def list_by_company(self, company_id: str) -> List[dict]:
        return execute_raw_sql("""
            SELECT id, title, location, status, created_at
            FROM internships WHERE company_id = :cid
            ORDER BY created_at DESC
        """, {"cid": company_id})


# ============================================================
# APPLICATIONS TABLE
# ============================================================

class ApplicationRecordService:
    """
    Candidate applications. (candidate_id, internship_id) is assumed
    unique but not enforced.
    """

    def insert(
        self,
        candidate_id: str,
        internship_id: str,
        status: str = "Applied",
        cover_letter: str = None,
        applied_at: str = None,
    ) -> str:
        application_id = new_id()
        applied_at = applied_at or utc_now()
        _insert("applications", {
            "id": application_id,
            "candidate_id": candidate_id,
            "internship_id": internship_id,
            "status": status,
            "cover_letter": cover_letter,
            "applied_at": applied_at,
            "updated_at": applied_at,
        })
        return application_id

    def list_for_candidate(self, candidate_id: str) -> List[dict]:
        """Applications joined with internship title and company name, newest first."""
        return execute_raw_sql("""
            SELECT a.id, a.status, a.applied_at, i.title AS internship_title, c.company_name
            FROM applications a
            LEFT JOIN internships i ON a.internship_id = i.id
            LEFT JOIN companies c ON i.company_id = c.id
            WHERE a.candidate_id = :cid
            ORDER BY a.applied_at DESC
        """, {"cid": candidate_id})

    def list_for_internships(self, internship_ids: List[str]) -> List[dict]:
        if not internship_ids:
            return []
        sql = text("""
            SELECT id, internship_id, status FROM applications
            WHERE internship_id IN :ids
        """).bindparams(bindparam("ids", expanding=True))
        with get_db_session() as db:
            result = db.execute(sql, {"ids": list(internship_ids)})
            columns = result.keys()
            return [dict(zip(columns, row)) for row in result.fetchall()]
