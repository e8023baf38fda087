# prepmate/services/insights.py
"""
Three-item insight lists (progress insights, profile suggestions).

No strict retry here: prose answers are split into lines instead, and an
empty or failed answer falls back to canned advice.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from prepmate.services import llm_schemas, prompts
from prepmate.services.llm_adapter import call_llm
from prepmate.services.llm_output import extract_and_parse, strip_fences
from prepmate.services.normalizer import normalize

logger = logging.getLogger(__name__)

BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")

PROGRESS_FALLBACK = [
    "You have a consistent upward trend. Keep reinforcing weaker skills.",
    "Resume alignment is improving. Add concrete metrics to experience.",
    "Maintain daily practice to extend your streak and retention.",
]

PROFILE_FALLBACK = [
    "Add STAR-format bullets to projects with metrics.",
    "Target 2 trending frameworks aligned to your goal.",
    "Refine LinkedIn headline to your target role.",
]


@dataclass
class InsightList:
    items: List[str]
    processing_time_ms: int = 0
    request_id: Optional[str] = None
    fallback: bool = False
    error: Optional[str] = None


def split_lines(text: str, limit: int = llm_schemas.INSIGHT_LIMIT) -> List[str]:
    lines = (BULLET_RE.sub("", line).strip() for line in strip_fences(text).splitlines())
    return [line for line in lines if line][:limit]


async def _short_list(prompt: prompts.Prompt, schema, field: str, fallback: List[str]) -> InsightList:
    prompt_type, system, user = prompt
    called = await call_llm(prompt_type, user, system)
    if not called.ok:
        return InsightList(items=list(fallback), fallback=True, error=called.error.reason)

    reply = called.value
    parsed = extract_and_parse(reply.text, "object")
    if parsed.ok:
        items = normalize(parsed.value, schema)[field]
    else:
        listed = extract_and_parse(reply.text, "array")
        if listed.ok:
            # a bare JSON list of strings is taken as the items themselves
            items = normalize({field: listed.value}, schema)[field]
        elif parsed.error.reason.startswith("expected "):
            # valid JSON of the wrong shape is never split into lines
            items = []
        else:
            logger.info("%s answer is not JSON, splitting lines", prompt_type)
            items = split_lines(reply.text)

    out = InsightList(items=items, processing_time_ms=reply.processing_time_ms, request_id=reply.request_id)
    if not items:
        out.items = list(fallback)
        out.fallback = True
    return out


async def progress_insights(metrics: Dict[str, Any]) -> InsightList:
    return await _short_list(prompts.progress_insights(metrics), llm_schemas.INSIGHTS, "insights",
                             PROGRESS_FALLBACK)


async def profile_suggestions(profile: Dict[str, Any]) -> InsightList:
    return await _short_list(prompts.profile_suggestions(profile), llm_schemas.PROFILE_SUGGESTIONS,
                             "suggestions", PROFILE_FALLBACK)
