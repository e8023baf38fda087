# prepmate/repositories/progress.py
from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now, _to_id

PROGRESS_COLLECTION = "user_progress"


async def mark_progress(user_id: str, skill_name: str, resource_link: Optional[str], is_completed: bool,
                        skill_total: Optional[int] = None) -> Dict[str, Any]:
    """
    One entry per user+skill+resource_link (resource_link None marks the whole skill).
    A given skill_total is copied onto every entry of the same skill.
    """
    db = get_db()
    key = {"user_id": user_id, "skill_name": skill_name, "resource_link": resource_link}
    update = {
        "is_completed": is_completed,
        "completed_at": _now() if is_completed else None,
        "updated_at": _now(),
    }
    if skill_total is not None:
        update["skill_total"] = skill_total
    doc = await db[PROGRESS_COLLECTION].find_one_and_update(
        key,
        {"$set": update, "$setOnInsert": {"created_at": _now()}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    if skill_total is not None:
        await db[PROGRESS_COLLECTION].update_many(
            {"user_id": user_id, "skill_name": skill_name}, {"$set": {"skill_total": skill_total}})
    return _to_id(doc)


async def list_progress(user_id: str) -> List[Dict[str, Any]]:
    db = get_db()
    cur = db[PROGRESS_COLLECTION].find({"user_id": user_id}).sort("updated_at", -1)
    return [_to_id(d) async for d in cur]
