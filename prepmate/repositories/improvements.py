# prepmate/repositories/improvements.py
from typing import Any, Dict, List, Optional

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now, _oid, _to_id

IMPROVEMENTS_COLLECTION = "resume_improvements"


async def create_improvement(user_id: str, resume_id: Optional[str], jd_text: str,
                             report: Dict[str, Any], request_id: str = "") -> str:
    db = get_db()
    payload = {
        "user_id": user_id,
        "resume_id": resume_id,
        "jd_text": jd_text,
        "analysis": report["analysis"],
        "jd_match": report["jd_match"],
        "improved_resume": report["improved_resume"],
        "improved_merged": report["improved_merged"],
        "applied_fixes": [],
        "request_id": request_id,
        "created_at": _now(),
    }
    res = await db[IMPROVEMENTS_COLLECTION].insert_one(payload)
    return str(res.inserted_id)


async def get_improvement(user_id: str, improvement_id: str) -> Optional[Dict[str, Any]]:
    db = get_db()
    doc = await db[IMPROVEMENTS_COLLECTION].find_one({"_id": _oid(improvement_id), "user_id": user_id})
    return _to_id(doc)


async def list_improvements(user_id: str, limit: int = 20) -> List[Dict[str, Any]]:
    """Latest analyses first, without the bulky rewritten resume."""
    db = get_db()
    cur = (db[IMPROVEMENTS_COLLECTION]
           .find({"user_id": user_id}, {"improved_resume": 0, "improved_merged": 0})
           .sort("created_at", -1)
           .limit(limit))
    return [_to_id(d) async for d in cur]
