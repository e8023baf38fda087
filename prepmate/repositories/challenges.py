# prepmate/repositories/challenges.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now, _oid, _to_id

CHALLENGES_COLLECTION = "daily_challenges"
STATUSES = ("pending", "completed", "skipped")


async def create_challenge(user_id: str, challenge: Dict[str, Any]) -> Dict[str, Any]:
    db = get_db()
    now = _now()
    payload = {
        "user_id": user_id,
        "date": now,
        "challenge_type": challenge["challenge_type"],
        "difficulty": challenge["difficulty"],
        "question": challenge["question"],
        "answer": challenge.get("answer", ""),
        "status": "pending",
        "generated_at": now,
        "completed_at": None,
    }
    res = await db[CHALLENGES_COLLECTION].insert_one(payload)
    payload["_id"] = res.inserted_id
    return _to_id(payload)


async def challenge_since(user_id: str, since: datetime) -> Optional[Dict[str, Any]]:
    db = get_db()
    cur = (db[CHALLENGES_COLLECTION]
           .find({"user_id": user_id, "date": {"$gte": since}})
           .sort("date", -1)
           .limit(1))
    async for d in cur:
        return _to_id(d)
    return None


async def set_status(user_id: str, challenge_id: str, status: str) -> Optional[Dict[str, Any]]:
    if status not in STATUSES:
        raise ValueError(f"unknown challenge status {status!r}")
    db = get_db()
    update = {"status": status, "completed_at": _now() if status == "completed" else None}
    res = await db[CHALLENGES_COLLECTION].update_one(
        {"_id": _oid(challenge_id), "user_id": user_id}, {"$set": update})
    if res.matched_count == 0:
        return None
    doc = await db[CHALLENGES_COLLECTION].find_one({"_id": _oid(challenge_id)})
    return _to_id(doc)


async def list_challenges(user_id: str, since: datetime, limit: int = 200) -> List[Dict[str, Any]]:
    db = get_db()
    cur = (db[CHALLENGES_COLLECTION]
           .find({"user_id": user_id, "date": {"$gte": since}})
           .sort("date", -1)
           .limit(limit))
    return [_to_id(d) async for d in cur]


async def delete_since(user_id: str, since: datetime) -> int:
    db = get_db()
    res = await db[CHALLENGES_COLLECTION].delete_many({"user_id": user_id, "date": {"$gte": since}})
    return res.deleted_count
