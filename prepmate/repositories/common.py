# prepmate/repositories/common.py
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId


def _now():
    return datetime.utcnow()


def _to_id(doc) -> Optional[Dict[str, Any]]:
    # convert Mongo's _id (ObjectId) to str when returning
    if not doc:
        return None
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc["_id"])
        del doc["_id"]
    return doc


def _oid(value: str) -> ObjectId:
    """Callers validate with ObjectId.is_valid first; a bad id raises bson.errors.InvalidId."""
    return value if isinstance(value, ObjectId) else ObjectId(value)
