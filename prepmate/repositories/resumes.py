# prepmate/repositories/resumes.py
from typing import Any, Dict, List, Optional

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now, _oid, _to_id

RESUMES_COLLECTION = "resumes"
PREVIEW_CHARS = 200


def _preview(text: str) -> str:
    text = text or ""
    return text[:PREVIEW_CHARS] + ("..." if len(text) > PREVIEW_CHARS else "")


async def create_resume(user_id: str, resume_text: str, jd_text: str, parsed_data: Dict[str, Any],
                        metadata: Optional[Dict[str, Any]] = None) -> str:
    db = get_db()
    payload = {
        "user_id": user_id,
        "resume_text": resume_text,
        "jd_text": jd_text,
        "parsed_data": parsed_data,
        "metadata": metadata or {},
        "created_at": _now(),
        "updated_at": _now(),
    }
    res = await db[RESUMES_COLLECTION].insert_one(payload)
    return str(res.inserted_id)


async def get_resume(user_id: str, resume_id: str) -> Optional[Dict[str, Any]]:
    db = get_db()
    doc = await db[RESUMES_COLLECTION].find_one({"_id": _oid(resume_id), "user_id": user_id})
    return _to_id(doc)


async def latest_resume(user_id: str) -> Optional[Dict[str, Any]]:
    db = get_db()
    cur = db[RESUMES_COLLECTION].find({"user_id": user_id}).sort("created_at", -1).limit(1)
    async for d in cur:
        return _to_id(d)
    return None


async def list_resumes(user_id: str, limit: int = 50) -> List[Dict[str, Any]]:
    db = get_db()
    cur = db[RESUMES_COLLECTION].find({"user_id": user_id}).sort("created_at", -1).limit(limit)
    out = []
    async for d in cur:
        item = _to_id(d)
        out.append({
            "id": item["id"],
            "resume_preview": _preview(item.get("resume_text")),
            "jd_preview": _preview(item.get("jd_text")),
            "name": (item.get("parsed_data") or {}).get("name", ""),
            "metadata": item.get("metadata") or {},
            "created_at": item.get("created_at"),
        })
    return out


async def delete_resume(user_id: str, resume_id: str) -> bool:
    db = get_db()
    res = await db[RESUMES_COLLECTION].delete_one({"_id": _oid(resume_id), "user_id": user_id})
    return res.deleted_count > 0
