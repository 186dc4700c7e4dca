import os
import time

# Must be set before gradlinkup reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["JWT_AUDIENCE"] = "authenticated"
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["DEBUG"] = "false"

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from pymongo.errors import PyMongoError

from gradlinkup.db.schema import clear_tables, init_schema
from gradlinkup.main import app
from gradlinkup.schemas.schemas import Identity
from gradlinkup.services.record_service import (
    ApplicationRecordService,
    CompanyRecordService,
    InternshipRecordService,
    ProfileRecordService,
)
from gradlinkup.services.storage_service import get_resume_storage


class FakeResumeStorage:
    """In-memory stand-in for the GridFS bucket."""

    def __init__(self):
        self.files = {}
        self.upload_calls = []
        self.url_calls = []
        self.fail_upload = False
        self.fail_url = False

    def upload(self, key, data, content_type=None, candidate_id=None):
        self.upload_calls.append(key)
        if self.fail_upload:
            raise PyMongoError("bucket unavailable")
        self.files[key] = (data, content_type)
        return "file-id"

    def get_public_url(self, key):
        self.url_calls.append(key)
        if self.fail_url:
            raise PyMongoError("url lookup failed")
        return f"http://testserver/api/storage/resumes/{key}"

    def open(self, key):
        if key not in self.files:
            return None
        data, content_type = self.files[key]
        return {
            "content_type": content_type or "application/octet-stream",
            "length": len(data),
            "chunks": iter([data]),
        }


class Seeder:
    def __init__(self):
        self.profiles = ProfileRecordService()
        self.companies = CompanyRecordService()
        self.internships = InternshipRecordService()
        self.applications = ApplicationRecordService()

    def candidate(self, user_id="cand-1", full_name="Asha Rao"):
        self.profiles.put({"id": user_id, "role": "candidate", "full_name": full_name})
        return user_id

    def company(self, user_id="comp-1", company_name="Acme Labs"):
        self.profiles.put({"id": user_id, "role": "company", "full_name": company_name})
        self.companies.put({"id": user_id, "company_name": company_name})
        return user_id

    def internship(self, company_id, title="Backend Intern", status="active", created_at=None, **extra):
        row = {
            "company_id": company_id,
            "title": title,
            "description": f"{title} role",
            "location": "Remote",
            "stipend": 10000,
            "capacity": 2,
            "required_skills": [],
            "affirmative_action_tags": [],
            "status": status,
        }
        if created_at:
            row["created_at"] = created_at
        row.update(extra)
        return self.internships.insert(row)["id"]

    def application(self, candidate_id, internship_id, status="Applied", applied_at=None):
        return self.applications.insert(candidate_id, internship_id, status=status, applied_at=applied_at)


@pytest.fixture(scope="session", autouse=True)
def schema():
    init_schema()


@pytest.fixture(autouse=True)
def clean_tables():
    yield
    clear_tables()


@pytest.fixture
def seed():
    return Seeder()


@pytest.fixture
def storage():
    return FakeResumeStorage()


@pytest.fixture
def client(storage):
    app.dependency_overrides[get_resume_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_token():
    def _make(sub="user-1", email="user@example.com", full_name=None, audience="authenticated",
              secret="test-secret", expires_in=3600):
        claims = {
            "sub": sub,
            "email": email,
            "aud": audience,
            "exp": int(time.time()) + expires_in,
            "user_metadata": {"full_name": full_name} if full_name else {},
        }
        return jwt.encode(claims, secret, algorithm="HS256")
    return _make


@pytest.fixture
def auth_headers(make_token):
    def _headers(sub="user-1", email="user@example.com", full_name=None):
        return {"Authorization": f"Bearer {make_token(sub=sub, email=email, full_name=full_name)}"}
    return _headers


@pytest.fixture
def identity():
    return Identity(id="user-1", email="user@example.com", display_name="Asha Rao")
