# tests/test_generate_api.py
import json

from prepmate.core.config import settings
from prepmate.repositories import resumes
from prepmate.services.cache import company_archive_key

PARSED = {"name": "Ada", "email": "", "skills": ["Python"], "experience": [], "education": [], "projects": []}

QUESTIONS = [{"question": f"Question {i}?", "type": "technical", "difficulty": "medium",
              "rationale": "fits", "relatedSkills": ["Python"]} for i in range(10)]


async def _stored_resume(user, text="Ada's resume text", jd="Python backend role"):
    return await resumes.create_resume(user["id"], text, jd, PARSED)


async def test_questions_from_stored_resume_are_persisted(client, llm, user, mongo_db):
    rid = await _stored_resume(user)
    llm.queue("```json\n" + json.dumps(QUESTIONS) + "\n```")
    r = await client.post("/api/generate/questions", json={"resume_id": rid})
    assert r.status_code == 200, r.text
    body = r.json()
    assert len(body["questions"]) == 10
    assert body["questions"][0]["related_skills"] == ["Python"]
    assert body["record_id"]
    assert len(llm.calls) == 1
    assert "Python backend role" in llm.calls[0]["prompt"]
    record = await mongo_db["question_records"].find_one({})
    assert record["resume_id"] == rid
    assert len(record["questions"]) == 10


async def test_questions_from_raw_text_parse_on_the_fly(client, llm, mongo_db):
    llm.queue(json.dumps(PARSED), json.dumps(QUESTIONS[:3]))
    r = await client.post("/api/generate/questions", json={"resume_text": "Ada", "jd_text": "Role"})
    assert r.status_code == 200
    assert len(r.json()["questions"]) == 3
    assert r.json()["record_id"] is None
    assert [c["prompt_type"] for c in llm.calls] == ["parse_resume", "questions"]
    assert await mongo_db["question_records"].count_documents({}) == 0


async def test_questions_without_usable_items_retry_then_502(client, llm, user):
    rid = await _stored_resume(user)
    llm.queue('[{"rationale": "missing question"}]', "[]")
    r = await client.post("/api/generate/questions", json={"resume_id": rid})
    assert r.status_code == 502
    assert len(llm.calls) == 2


async def test_questions_require_input(client):
    r = await client.post("/api/generate/questions", json={"jd_text": "only jd"})
    assert r.status_code == 400
    r = await client.post("/api/generate/questions", json={"resume_id": "bad"})
    assert r.status_code == 400


async def test_company_archive_is_cached(client, llm, fake_cache, mongo_db):
    llm.queue(json.dumps({"rounds": [{"roundName": "Online Test", "questions": [
        {"question": "Reverse a list", "confidence": "high"}, {"source": "blog"}]}]}))
    r = await client.post("/api/generate/company-archive", json={"company_name": "  Acme Corp "})
    assert r.status_code == 200
    body = r.json()
    assert body["cached"] is False
    archive = body["archive"]
    assert archive["company"] == "Acme Corp"
    assert archive["note"] == "no prior questions found"
    assert archive["rounds"] == [{"round_name": "Online Test", "questions": [
        {"question": "Reverse a list", "source": "inferred", "confidence": 0.9}]}]
    key = company_archive_key("acme corp")
    assert fake_cache.store[key] == archive
    assert fake_cache.ttls[key] == settings.COMPANY_ARCHIVE_TTL_SEC
    assert await mongo_db["company_archives"].count_documents({"company_name": "acme corp"}) == 1

    again = await client.post("/api/generate/company-archive", json={"company_name": "ACME   corp"})
    assert again.json()["cached"] is True
    assert again.json()["archive"] == archive
    assert len(llm.calls) == 1


async def test_resources_from_jd(client, llm, mongo_db):
    skills = [{"skill": f"Skill {i}", "resources": [
        {"title": "Docs", "link": "https://example.com", "type": "Doc", "estimatedTime": "2h"},
        {"title": "No url"},
    ]} for i in range(8)]
    llm.queue(json.dumps(skills))
    r = await client.post("/api/generate/resources", json={"jd_text": "Kubernetes and Go"})
    assert r.status_code == 200
    out = r.json()["skills"]
    assert len(out) == 6
    assert out[0]["resources"] == [{"title": "Docs", "url": "https://example.com", "type": "doc",
                                    "summary": "", "estimated_time": "2h"}]
    assert await mongo_db["resource_records"].count_documents({}) == 1


async def test_resources_need_jd(client):
    r = await client.post("/api/generate/resources", json={})
    assert r.status_code == 400


async def test_resume_suggestions(client, llm):
    llm.queue('{"Missing Skills": ["Docker"], "contentImprovements": "Quantify impact",}')
    r = await client.post("/api/generate/resume-suggestions", json={"resume_text": "Ada", "jd_text": "Role"})
    assert r.status_code == 200
    assert r.json()["suggestions"] == {
        "missing_skills": ["Docker"],
        "content_improvements": ["Quantify impact"],
        "keyword_optimization": [],
        "formatting_tone": [],
    }


async def test_resume_improver_persists_report_and_user_summary(client, llm, user, mongo_db):
    rid = await _stored_resume(user)
    llm.queue(json.dumps({
        "analysis": {"summary": "Good", "overallScore": 80, "missingSkills": ["AWS"]},
        "jdMatch": {"score": 70},
        "improvedResume": {"summary": {"original": "old", "improved": "new", "confidence": 0.9}},
        "recommendations": [{"field": "Skills", "issue": "thin", "fix": "add AWS", "confidence": 85}],
    }))
    r = await client.post("/api/generate/resume-improver", json={"resume_id": rid})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["analysis"]["overall_score"] == 80
    assert body["jd_match"] == {"score": 70, "missing_skills": ["AWS"]}
    assert body["improved_merged"] == "Summary\nnew"

    stored = await mongo_db["resume_improvements"].find_one({})
    assert stored["resume_id"] == rid
    assert stored["analysis"]["recommendations"][0]["confidence_score"] == 85
    from bson import ObjectId
    u = await mongo_db["users"].find_one({"_id": ObjectId(user["id"])})
    assert u["improved_resume"]["overall_score"] == 80
    assert u["improved_resume"]["recommendations"][0]["section"] == "Summary"


async def test_resume_improver_double_failure_persists_nothing(client, llm, mongo_db):
    llm.queue("prose", "more prose")
    r = await client.post("/api/generate/resume-improver", json={"resume_text": "Ada", "jd_text": "Role"})
    assert r.status_code == 502
    assert r.json()["detail"] == "Invalid JSON returned from the generative API."
    assert await mongo_db["resume_improvements"].count_documents({}) == 0
