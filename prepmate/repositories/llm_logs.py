# prepmate/repositories/llm_logs.py
import logging
from typing import Any, Dict, Optional

from prepmate.db.mongo import get_db
from prepmate.repositories.common import _now

logger = logging.getLogger(__name__)

LLM_LOGS_COLLECTION = "llm_logs"
RESUME_TEXT_LOG_CHARS = 200


def sanitize_for_logging(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    sanitized = dict(data or {})
    text = sanitized.get("resume_text")
    if isinstance(text, str) and len(text) > RESUME_TEXT_LOG_CHARS:
        sanitized["resume_text"] = text[:RESUME_TEXT_LOG_CHARS] + "..."
    sanitized.pop("password", None)
    return sanitized


async def log_llm_call(
    endpoint: str,
    prompt_type: str,
    *,
    user_id: Optional[str] = None,
    request_data: Optional[Dict[str, Any]] = None,
    response_data: Any = None,
    processing_time_ms: int = 0,
    success: bool = True,
    error_message: Optional[str] = None,
    request_id: Optional[str] = None,
) -> None:
    """Best-effort: a failed write is logged and swallowed."""
    payload = {
        "user_id": user_id,
        "endpoint": endpoint,
        "prompt_type": prompt_type,
        "request_data": sanitize_for_logging(request_data),
        "response_data": response_data,
        "processing_time_ms": processing_time_ms,
        "success": success,
        "error_message": error_message,
        "request_id": request_id,
        "timestamp": _now(),
    }
    try:
        await get_db()[LLM_LOGS_COLLECTION].insert_one(payload)
    except Exception:
        logger.exception("failed to persist LLM log for %s", endpoint)
