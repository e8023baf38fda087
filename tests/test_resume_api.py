# tests/test_resume_api.py
import json

from prepmate.repositories.llm_logs import LLM_LOGS_COLLECTION
from prepmate.services.parse_utils import MAX_UPLOAD_BYTES

PARSED = {"name": "Ada", "email": "ada@example.com", "skills": ["Python"], "experience": [],
          "education": [], "projects": []}


async def test_upload_text_resume_parses_and_persists(client, llm, mongo_db):
    llm.queue("Sure:\n" + json.dumps({"Name": "Ada", "email": "ada@example.com", "Skills": ["Python"]}))
    r = await client.post("/api/user/resume", data={"jd_text": "Backend role", "resume_text": "Ada resume " * 40})
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["parsed_data"] == PARSED

    listed = await client.get("/api/user/resume")
    items = listed.json()["items"]
    assert len(items) == 1
    assert items[0]["id"] == body["resume_id"]
    assert items[0]["resume_preview"].endswith("...")
    assert len(items[0]["resume_preview"]) == 203

    one = await client.get(f"/api/user/resume/{body['resume_id']}")
    assert one.status_code == 200
    assert one.json()["jd_text"] == "Backend role"

    log = await mongo_db[LLM_LOGS_COLLECTION].find_one({"endpoint": "/api/user/resume"})
    assert log["success"] is True
    assert log["request_data"]["resume_text"].endswith("...")
    assert len(log["request_data"]["resume_text"]) == 203


async def test_upload_file_resume(client, llm):
    llm.queue(json.dumps(PARSED))
    files = {"resume_file": ("cv.txt", b"Ada Lovelace\nPython", "text/plain")}
    r = await client.post("/api/user/resume", data={"jd_text": "Role"}, files=files)
    assert r.status_code == 201
    assert "Ada Lovelace" in llm.calls[0]["prompt"]


async def test_upload_rejects_unsupported_file(client):
    files = {"resume_file": ("cv.exe", b"MZ", "application/octet-stream")}
    r = await client.post("/api/user/resume", data={"jd_text": "Role"}, files=files)
    assert r.status_code == 400


async def test_upload_rejects_oversized_file_before_parsing(client, llm, mongo_db):
    files = {"resume_file": ("cv.txt", b"a" * (MAX_UPLOAD_BYTES + 10), "text/plain")}
    r = await client.post("/api/user/resume", data={"jd_text": "Role"}, files=files)
    assert r.status_code == 400
    assert "5 MB" in r.json()["detail"]
    assert llm.calls == []
    assert await mongo_db["resumes"].count_documents({}) == 0


async def test_upload_requires_resume_text(client):
    r = await client.post("/api/user/resume", data={"jd_text": "Role"})
    assert r.status_code == 400


async def test_upload_malformed_twice_is_502_and_nothing_stored(client, llm, mongo_db):
    llm.queue("no json", "still no json")
    r = await client.post("/api/user/resume", data={"jd_text": "Role", "resume_text": "Ada"})
    assert r.status_code == 502
    assert await mongo_db["resumes"].count_documents({}) == 0
    log = await mongo_db[LLM_LOGS_COLLECTION].find_one({"endpoint": "/api/user/resume"})
    assert log["success"] is False
    assert log["response_data"] == {"raw": "still no json"}
    assert len(llm.calls) == 2


async def test_upload_upstream_failure_is_500(client, llm):
    llm.queue(RuntimeError("quota"))
    r = await client.post("/api/user/resume", data={"jd_text": "Role", "resume_text": "Ada"})
    assert r.status_code == 500


async def test_resume_ids_are_validated_and_owned(client, mongo_db):
    assert (await client.get("/api/user/resume/not-an-id")).status_code == 400
    other = await mongo_db["resumes"].insert_one({"user_id": "someone-else", "resume_text": "x", "jd_text": "y"})
    assert (await client.get(f"/api/user/resume/{other.inserted_id}")).status_code == 404
    assert (await client.delete(f"/api/user/resume/{other.inserted_id}")).status_code == 404


async def test_delete_resume(client, llm):
    llm.queue(json.dumps(PARSED))
    r = await client.post("/api/user/resume", data={"jd_text": "Role", "resume_text": "Ada"})
    rid = r.json()["resume_id"]
    assert (await client.delete(f"/api/user/resume/{rid}")).json() == {"deleted": True}
    assert (await client.get(f"/api/user/resume/{rid}")).status_code == 404


async def test_profile_update_writes_only_profile_fields(client, mongo_db):
    r = await client.put("/api/user/profile/update",
                         json={"college": "MIT", "skills": ["Go", "SQL"], "role": "admin"})
    assert r.status_code == 200, r.text
    body = r.json()["user"]
    assert body["college"] == "MIT"
    assert body["skills"] == ["Go", "SQL"]
    assert body["name"] == "Test Student"
    assert body["role"] == "user"
    assert "password_hash" not in body

    empty = await client.put("/api/user/profile/update", json={})
    assert empty.status_code == 400
