# prepmate/api/v1/common.py
import logging
from typing import Any, Dict, NoReturn, Optional

from bson import ObjectId
from fastapi import HTTPException

from prepmate.repositories.llm_logs import log_llm_call
from prepmate.services.llm_result import LLMError

logger = logging.getLogger(__name__)


def require_object_id(value: Optional[str], what: str = "id") -> str:
    if not value or not ObjectId.is_valid(value):
        raise HTTPException(status_code=400, detail=f"Invalid {what}")
    return value


async def raise_for_llm_error(
    error: LLMError,
    endpoint: str,
    prompt_type: str,
    user_id: Optional[str] = None,
    request_data: Optional[Dict[str, Any]] = None,
) -> NoReturn:
    """Log and persist a terminal LLM failure, then answer 502 (malformed) or 500 (upstream)."""
    raw = getattr(error, "raw", "")
    logger.error("%s failed: %s: %s raw=%r", endpoint, type(error).__name__, error.reason, raw)
    await log_llm_call(
        endpoint,
        prompt_type,
        user_id=user_id,
        request_data=request_data,
        response_data={"raw": raw} if raw else None,
        success=False,
        error_message=error.reason,
    )
    raise HTTPException(status_code=error.status_code, detail=error.public_message)
