# prepmate/repositories/users.py
from typing import Any, Dict, Optional

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now, _oid, _to_id

USERS_COLLECTION = "users"

PROFILE_FIELDS = ("name", "college", "degree", "year", "skills", "goal", "linkedin", "github",
                  "experience_level", "jd_text", "resume_text")


def public_user(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not doc:
        return None
    out = dict(doc)
    out.pop("password_hash", None)
    return out


async def create_user(email: str, password_hash: str, name: str = "") -> str:
    """Raises pymongo.errors.DuplicateKeyError when the email index rejects the insert."""
    db = get_db()
    payload = {
        "email": email.strip().lower(),
        "password_hash": password_hash,
        "name": name.strip(),
        "role": "user",
        "skills": [],
        "created_at": _now(),
        "updated_at": _now(),
    }
    res = await db[USERS_COLLECTION].insert_one(payload)
    return str(res.inserted_id)


async def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    db = get_db()
    doc = await db[USERS_COLLECTION].find_one({"email": email.strip().lower()})
    return _to_id(doc)


async def get_user(user_id: str) -> Optional[Dict[str, Any]]:
    db = get_db()
    doc = await db[USERS_COLLECTION].find_one({"_id": _oid(user_id)})
    return _to_id(doc)


async def update_profile(user_id: str, fields: Dict[str, Any]) -> None:
    db = get_db()
    update = {k: v for k, v in fields.items() if k in PROFILE_FIELDS}
    update["updated_at"] = _now()
    await db[USERS_COLLECTION].update_one({"_id": _oid(user_id)}, {"$set": update})


async def set_improved_resume(user_id: str, quick_access: Dict[str, Any]) -> None:
    """Keep the latest improvement summary on the user for quick access."""
    db = get_db()
    doc = dict(quick_access, updated_at=_now())
    await db[USERS_COLLECTION].update_one({"_id": _oid(user_id)}, {"$set": {"improved_resume": doc}})
