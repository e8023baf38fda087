# prepmate/repositories/saved_resources.py
from typing import Any, Dict, List

from pymongo import ReturnDocument

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now, _oid, _to_id

SAVED_RESOURCES_COLLECTION = "saved_resources"


async def save_resource(user_id: str, title: str, link: str, description: str) -> Dict[str, Any]:
    """Upsert per user+link; an existing entry is returned untouched."""
    db = get_db()
    doc = await db[SAVED_RESOURCES_COLLECTION].find_one_and_update(
        {"user_id": user_id, "link": link},
        {"$setOnInsert": {"user_id": user_id, "link": link, "title": title,
                          "description": description, "saved_at": _now()}},
        upsert=True,
        return_document=ReturnDocument.AFTER,
    )
    return _to_id(doc)


async def list_saved(user_id: str) -> List[Dict[str, Any]]:
    db = get_db()
    cur = db[SAVED_RESOURCES_COLLECTION].find({"user_id": user_id}).sort("saved_at", -1)
    return [_to_id(d) async for d in cur]


async def delete_saved(user_id: str, resource_id: str) -> bool:
    db = get_db()
    res = await db[SAVED_RESOURCES_COLLECTION].delete_one({"_id": _oid(resource_id), "user_id": user_id})
    return res.deleted_count > 0
