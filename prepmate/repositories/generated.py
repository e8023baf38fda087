# prepmate/repositories/generated.py
"""Records of generated content: question sets, company archives, resource lists."""
from typing import Any, Dict, List, Optional

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now

QUESTIONS_COLLECTION = "question_records"
COMPANY_ARCHIVES_COLLECTION = "company_archives"
RESOURCES_COLLECTION = "resource_records"


async def create_question_record(user_id: str, resume_id: str, questions: List[Dict[str, Any]],
                                 request_id: str = "", processing_time_ms: int = 0) -> str:
    db = get_db()
    payload = {
        "user_id": user_id,
        "resume_id": resume_id,
        "questions": questions,
        "request_id": request_id,
        "processing_time_ms": processing_time_ms,
        "created_at": _now(),
    }
    res = await db[QUESTIONS_COLLECTION].insert_one(payload)
    return str(res.inserted_id)


async def create_company_archive(archive: Dict[str, Any], request_id: str = "",
                                 processing_time_ms: int = 0) -> str:
    db = get_db()
    payload = {
        "company_name": archive["company"].strip().lower(),
        "archive": archive,
        "request_id": request_id,
        "processing_time_ms": processing_time_ms,
        "fetched_at": _now(),
    }
    res = await db[COMPANY_ARCHIVES_COLLECTION].insert_one(payload)
    return str(res.inserted_id)


async def create_resource_record(user_id: str, resume_id: Optional[str], skills: List[Dict[str, Any]],
                                 request_id: str = "", processing_time_ms: int = 0) -> str:
    db = get_db()
    payload = {
        "user_id": user_id,
        "resume_id": resume_id,
        "jd_skills": skills,
        "request_id": request_id,
        "processing_time_ms": processing_time_ms,
        "fetched_at": _now(),
    }
    res = await db[RESOURCES_COLLECTION].insert_one(payload)
    return str(res.inserted_id)
