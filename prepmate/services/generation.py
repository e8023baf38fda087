# prepmate/services/generation.py
"""
Structured generation for resumes, interview questions, company archives,
learning resources and resume suggestions. Each function returns
Ok(StructuredReply) or Err(MalformedResponse | UpstreamFailure).
"""

import logging
from typing import Any, Dict, Optional

from prepmate.core.config import settings
from prepmate.services import llm_schemas, prompts
from prepmate.services.cache import cache, company_archive_key
from prepmate.services.llm_adapter import LLMReply
from prepmate.services.llm_result import Ok, Result
from prepmate.services.normalizer import normalize, normalize_list
from prepmate.services.structured import StructuredReply, generate_structured

logger = logging.getLogger(__name__)


def _require_items(what: str):
    def accept(items) -> Optional[str]:
        return None if items else f"no usable {what} in response"
    return accept


def _normalize_questions(value: Any):
    return normalize_list(value, llm_schemas.QUESTION, limit=llm_schemas.QUESTION_LIMIT, require="question")


def _normalize_skills(value: Any):
    return normalize_list(value, llm_schemas.SKILL_RESOURCES, limit=llm_schemas.SKILL_LIMIT, require="skill")


async def parse_resume(resume_text: str) -> Result:
    return await generate_structured(
        prompts.parse_resume(resume_text),
        lambda v: normalize(v, llm_schemas.PARSED_RESUME),
    )


async def interview_questions(parsed_resume: Dict[str, Any], jd_text: str) -> Result:
    return await generate_structured(
        prompts.questions(parsed_resume, jd_text),
        _normalize_questions,
        expect="array",
        accept=_require_items("questions"),
    )


async def company_archive(company_name: str) -> Result:
    """Served from the Redis cache when fresh; cached=True marks such replies."""
    key = company_archive_key(company_name)
    cached = await cache.get(key)
    if cached:
        logger.info("company archive cache hit for %s", key)
        reply = LLMReply(text="", processing_time_ms=0, request_id="cache")
        return Ok(StructuredReply(data=normalize(cached, llm_schemas.COMPANY_ARCHIVE), reply=reply, attempts=0))

    def _normalize_archive(value):
        archive = normalize(value, llm_schemas.COMPANY_ARCHIVE)
        if not archive["company"]:
            archive["company"] = company_name.strip()
        return archive

    result = await generate_structured(prompts.company_archive(company_name), _normalize_archive)
    if result.ok:
        await cache.set(key, result.value.data, ttl=settings.COMPANY_ARCHIVE_TTL_SEC)
    return result


async def skill_resources(jd_text: str) -> Result:
    return await generate_structured(
        prompts.resources(jd_text),
        _normalize_skills,
        expect="array",
        accept=_require_items("skills"),
    )


async def resume_suggestions(resume_text: str, jd_text: str) -> Result:
    return await generate_structured(
        prompts.resume_suggestions(resume_text, jd_text),
        lambda v: normalize(v, llm_schemas.RESUME_SUGGESTIONS),
    )
