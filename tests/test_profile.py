import re

import pytest

from gradlinkup.schemas.schemas import ProfileUpdate
from gradlinkup.services.profile_service import ProfileDraft, ProfileEditService, resume_key
from gradlinkup.services.record_service import ProfileRecordService
from gradlinkup.services.storage_service import ResumeStorageService


# ============================================================
# DRAFT EDITING
# ============================================================

def test_skill_rules_on_draft():
    draft = ProfileDraft("cand-1", skills=["Python"])

    assert draft.add_skill("Python") is False
    assert draft.add_skill(" Python ") is False
    assert draft.add_skill("") is False
    assert draft.skills == ["Python"]

    assert draft.add_skill("python ") is True
    assert draft.skills == ["Python", "python"]

    assert draft.remove_skill("Python") is True
    assert draft.skills == ["python"]


def test_set_field_rejects_unknown_names():
    draft = ProfileDraft("cand-1")
    draft.set_field("qualifications", "B.Tech CSE")
    assert draft.qualifications == "B.Tech CSE"

    with pytest.raises(ValueError):
        draft.set_field("role", "company")


def test_saved_row_is_always_candidate():
    draft = ProfileDraft("cand-1", role="company")
    assert draft.to_row()["role"] == "candidate"


def test_resume_key_format():
    assert resume_key("cand-1", "My CV.final.PDF", 1700000000000) == "cand-1-resume-1700000000000.PDF"


# ============================================================
# RESUME UPLOAD (service)
# ============================================================

def test_upload_sets_resume_url(storage, identity):
    service = ProfileEditService(storage=storage)
    draft = ProfileDraft(identity.id)

    result = service.upload_resume(draft, "cv.pdf", b"%PDF", "application/pdf", timestamp_ms=42)

    assert result["success"] is True
    assert result["key"] == "user-1-resume-42.pdf"
    assert draft.resume_url == "http://testserver/api/storage/resumes/user-1-resume-42.pdf"
    assert storage.upload_calls == ["user-1-resume-42.pdf"]


def test_upload_failure_keeps_previous_url(storage, identity):
    storage.fail_upload = True
    service = ProfileEditService(storage=storage)
    draft = ProfileDraft(identity.id, resume_url="http://old/cv.pdf")

    result = service.upload_resume(draft, "cv.pdf", b"%PDF", timestamp_ms=42)

    assert result["success"] is False
    assert result["error"] == "bucket unavailable"
    assert draft.resume_url == "http://old/cv.pdf"
    assert storage.url_calls == []


def test_url_failure_keeps_previous_url(storage, identity):
    storage.fail_url = True
    service = ProfileEditService(storage=storage)
    draft = ProfileDraft(identity.id, resume_url="http://old/cv.pdf")

    result = service.upload_resume(draft, "cv.docx", b"doc", timestamp_ms=42)

    assert result["success"] is False
    assert draft.resume_url == "http://old/cv.pdf"


# ============================================================
# LOAD / SAVE (service)
# ============================================================

def test_load_missing_profile_gives_empty_draft(identity):
    draft = ProfileEditService().load(identity)

    assert draft.exists is False
    assert draft.role is None
    assert draft.full_name == "Asha Rao"
    assert draft.skills == []


def test_save_upserts_full_row(identity, seed):
    seed.company(identity.id)
    service = ProfileEditService()
    draft = service.load(identity)
    service.apply_update(draft, ProfileUpdate(
        full_name="Asha R.", qualifications="MSc", skills=["SQL", " SQL", "Go"],
        location_preference="Pune", social_category="OBC",
    ))

    assert service.save(draft)["success"] is True

    stored = ProfileRecordService().get(identity.id)
    assert stored["role"] == "candidate"
    assert stored["skills"] == ["SQL", "Go"]
    assert stored["location_preference"] == "Pune"
    assert stored["social_category"] == "OBC"
    assert ProfileRecordService().count(identity.id) == 1


# ============================================================
# API
# ============================================================

def test_get_profile_first_visit(client, auth_headers):
    rv = client.get("/api/candidate/profile", headers=auth_headers(sub="cand-1", full_name="Asha Rao"))
    assert rv.status_code == 200
    data = rv.json()
    assert data["exists"] is False
    assert data["role"] is None
    assert data["full_name"] == "Asha Rao"


def test_put_profile_normalizes_skills(client, auth_headers):
    headers = auth_headers(sub="cand-1")
    body = {
        "full_name": "Asha Rao",
        "qualifications": "B.Tech",
        "skills": ["Python", " Python ", "", "python "],
        "location_preference": "Remote",
    }

    rv = client.put("/api/candidate/profile", json=body, headers=headers)
    assert rv.status_code == 200
    assert rv.json()["skills"] == ["Python", "python"]
    assert rv.json()["role"] == "candidate"

    loaded = client.get("/api/candidate/profile", headers=headers).json()
    assert loaded["exists"] is True
    assert loaded["qualifications"] == "B.Tech"
    assert loaded["skills"] == ["Python", "python"]


def test_put_profile_keeps_omitted_fields(client, auth_headers):
    headers = auth_headers(sub="cand-1")
    client.put("/api/candidate/profile", json={
        "full_name": "Asha Rao",
        "qualifications": "B.Tech",
        "skills": ["Python", "SQL"],
        "location_preference": "Remote",
    }, headers=headers)

    rv = client.put("/api/candidate/profile", json={"resume_url": "http://testserver/cv.pdf"}, headers=headers)
    assert rv.status_code == 200

    loaded = client.get("/api/candidate/profile", headers=headers).json()
    assert loaded["resume_url"] == "http://testserver/cv.pdf"
    assert loaded["full_name"] == "Asha Rao"
    assert loaded["qualifications"] == "B.Tech"
    assert loaded["skills"] == ["Python", "SQL"]
    assert loaded["location_preference"] == "Remote"


def test_put_profile_clears_explicit_nulls(client, auth_headers):
    headers = auth_headers(sub="cand-1")
    client.put("/api/candidate/profile", json={"full_name": "Asha Rao", "social_category": "OBC"}, headers=headers)

    client.put("/api/candidate/profile", json={"social_category": None, "skills": []}, headers=headers)

    loaded = client.get("/api/candidate/profile", headers=headers).json()
    assert loaded["social_category"] is None
    assert loaded["skills"] == []
    assert loaded["full_name"] == "Asha Rao"


def test_resume_upload_not_persisted_until_save(client, auth_headers, storage):
    headers = auth_headers(sub="cand-1")
    files = {"file": ("cv.pdf", b"%PDF-1.4 resume", "application/pdf")}

    rv = client.post("/api/candidate/profile/resume", files=files, headers=headers)
    assert rv.status_code == 200
    data = rv.json()
    assert re.match(r"^cand-1-resume-\d+\.pdf$", data["key"])
    assert data["resume_url"].endswith(data["key"])

    assert client.get("/api/candidate/profile", headers=headers).json()["resume_url"] is None

    client.put("/api/candidate/profile", json={"resume_url": data["resume_url"]}, headers=headers)
    assert client.get("/api/candidate/profile", headers=headers).json()["resume_url"] == data["resume_url"]

    download = client.get(f"/api/storage/resumes/{data['key']}")
    assert download.status_code == 200
    assert download.content == b"%PDF-1.4 resume"


def test_resume_upload_failure(client, auth_headers, storage):
    storage.fail_upload = True
    files = {"file": ("cv.pdf", b"%PDF", "application/pdf")}

    rv = client.post("/api/candidate/profile/resume", files=files, headers=auth_headers(sub="cand-1"))
    assert rv.status_code == 500
    assert rv.json()["detail"] == "bucket unavailable"
    assert storage.url_calls == []


@pytest.mark.parametrize("filename,content,status", [
    ("notes.txt", b"hello", 400),
    ("resume", b"hello", 400),
    ("cv.pdf", b"", 400),
])
def test_resume_upload_validation(client, auth_headers, storage, filename, content, status):
    files = {"file": (filename, content, "application/octet-stream")}
    rv = client.post("/api/candidate/profile/resume", files=files, headers=auth_headers())
    assert rv.status_code == status
    assert storage.upload_calls == []


def test_download_unknown_file(client):
    assert client.get("/api/storage/resumes/missing.pdf").status_code == 404
    assert client.get("/api/storage/logos/missing.png").status_code == 404


def test_public_url_encodes_slashes_in_key():
    url = ResumeStorageService(bucket=object()).get_public_url("org/cand-1-resume-42.pdf")
    assert url.endswith("/api/storage/resumes/org%2Fcand-1-resume-42.pdf")


def test_download_key_with_slash(client, storage):
    storage.files["org/cand-1-resume-42.pdf"] = (b"%PDF", "application/pdf")

    rv = client.get("/api/storage/resumes/org%2Fcand-1-resume-42.pdf")
    assert rv.status_code == 200
    assert rv.content == b"%PDF"
