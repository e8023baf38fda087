# prepmate/api/v1/generate.py
"""
Generation endpoints: interview questions, company archives, learning
resources, resume suggestions and the resume improvement report.
Terminal LLM failures answer 502 (malformed output) or 500 (upstream).
"""

import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException

from prepmate.api.v1.auth import get_current_user
from prepmate.api.v1.common import raise_for_llm_error, require_object_id
from prepmate.api.v1.schemas import CompanyArchiveIn, ResourcesIn, ResumeJDIn
from prepmate.repositories import generated, improvements, resumes, users
from prepmate.repositories.llm_logs import log_llm_call
from prepmate.services import generation, prompts, resume_improver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/generate", tags=["generate"])


async def _stored_resume(user_id: str, resume_id: str) -> Dict[str, Any]:
    doc = await resumes.get_resume(user_id, require_object_id(resume_id, "resume id"))
    if not doc:
        raise HTTPException(status_code=404, detail="Resume not found")
    return doc


async def _resume_and_jd(payload: ResumeJDIn, user_id: str) -> Tuple[Optional[Dict[str, Any]], str, str]:
    """(stored resume or None, resume text, jd text); the stored resume fills missing text."""
    resume_text = (payload.resume_text or "").strip()
    jd_text = (payload.jd_text or "").strip()
    doc = None
    if payload.resume_id:
        doc = await _stored_resume(user_id, payload.resume_id)
        resume_text = resume_text or resume_improver.resume_text_for(doc)
        jd_text = jd_text or (doc.get("jd_text") or "")
    if not resume_text or not jd_text:
        raise HTTPException(status_code=400, detail="Either resume_id or both resume_text and jd_text are required")
    return doc, resume_text, jd_text


async def _log_success(endpoint: str, prompt_type: str, user_id: str, request_data, structured, response=None):
    await log_llm_call(
        endpoint, prompt_type,
        user_id=user_id,
        request_data=request_data,
        response_data=structured.data if response is None else response,
        processing_time_ms=structured.reply.processing_time_ms,
        request_id=structured.reply.request_id,
    )


@router.post("/questions")
async def generate_questions(payload: ResumeJDIn, current_user=Depends(get_current_user)):
    endpoint = "/api/generate/questions"
    uid = current_user["id"]
    doc, resume_text, jd_text = await _resume_and_jd(payload, uid)
    request_data = {"resume_text": resume_text, "jd_len": len(jd_text), "resume_id": payload.resume_id}

    if doc is not None and doc.get("parsed_data"):
        parsed_resume = doc["parsed_data"]
    else:
        parsed = await generation.parse_resume(resume_text)
        if not parsed.ok:
            await raise_for_llm_error(parsed.error, endpoint, prompts.PARSE_RESUME, uid, request_data)
        parsed_resume = parsed.value.data

    result = await generation.interview_questions(parsed_resume, jd_text)
    if not result.ok:
        await raise_for_llm_error(result.error, endpoint, prompts.QUESTIONS, uid, request_data)

    questions = result.value.data
    await _log_success(endpoint, prompts.QUESTIONS, uid, request_data, result.value)
    record_id = None
    if doc is not None:
        record_id = await generated.create_question_record(
            uid, doc["id"], questions, result.value.reply.request_id, result.value.reply.processing_time_ms)
    return {
        "questions": questions,
        "record_id": record_id,
        "processing_time_ms": result.value.reply.processing_time_ms,
    }


@router.post("/company-archive")
async def generate_company_archive(payload: CompanyArchiveIn, current_user=Depends(get_current_user)):
    endpoint = "/api/generate/company-archive"
    uid = current_user["id"]
    company = payload.company_name.strip()
    if not company:
        raise HTTPException(status_code=400, detail="company_name is required")
    request_data = {"company_name": company}

    result = await generation.company_archive(company)
    if not result.ok:
        await raise_for_llm_error(result.error, endpoint, prompts.COMPANY_ARCHIVE, uid, request_data)

    structured = result.value
    cached = structured.attempts == 0
    record_id = None
    if not cached:
        await _log_success(endpoint, prompts.COMPANY_ARCHIVE, uid, request_data, structured)
        record_id = await generated.create_company_archive(
            structured.data, structured.reply.request_id, structured.reply.processing_time_ms)
    return {"archive": structured.data, "record_id": record_id, "cached": cached}


@router.post("/resources")
async def generate_resources(payload: ResourcesIn, current_user=Depends(get_current_user)):
    endpoint = "/api/generate/resources"
    uid = current_user["id"]
    jd_text = (payload.jd_text or "").strip()
    resume_id = None
    if not jd_text and payload.resume_id:
        doc = await _stored_resume(uid, payload.resume_id)
        jd_text = (doc.get("jd_text") or "").strip()
        resume_id = doc["id"]
    if not jd_text:
        raise HTTPException(status_code=400, detail="Either jd_text or resume_id is required")
    request_data = {"jd_len": len(jd_text), "resume_id": resume_id}

    result = await generation.skill_resources(jd_text)
    if not result.ok:
        await raise_for_llm_error(result.error, endpoint, prompts.RESOURCES, uid, request_data)

    structured = result.value
    await _log_success(endpoint, prompts.RESOURCES, uid, request_data, structured)
    record_id = await generated.create_resource_record(
        uid, resume_id, structured.data, structured.reply.request_id, structured.reply.processing_time_ms)
    return {"skills": structured.data, "record_id": record_id}


@router.post("/resume-suggestions")
async def generate_resume_suggestions(payload: ResumeJDIn, current_user=Depends(get_current_user)):
    endpoint = "/api/generate/resume-suggestions"
    uid = current_user["id"]
    _doc, resume_text, jd_text = await _resume_and_jd(payload, uid)
    request_data = {"resume_text": resume_text, "jd_len": len(jd_text)}

    result = await generation.resume_suggestions(resume_text, jd_text)
    if not result.ok:
        await raise_for_llm_error(result.error, endpoint, prompts.RESUME_SUGGESTIONS, uid, request_data)

    await _log_success(endpoint, prompts.RESUME_SUGGESTIONS, uid, request_data, result.value)
    return {"suggestions": result.value.data, "processing_time_ms": result.value.reply.processing_time_ms}


@router.post("/resume-improver")
async def generate_resume_improvement(payload: ResumeJDIn, current_user=Depends(get_current_user)):
    endpoint = "/api/generate/resume-improver"
    uid = current_user["id"]
    doc, resume_text, jd_text = await _resume_and_jd(payload, uid)
    request_data = {"has_resume_id": doc is not None, "jd_len": len(jd_text)}

    result = await resume_improver.improve(resume_text, jd_text)
    if not result.ok:
        await raise_for_llm_error(result.error, endpoint, prompts.RESUME_IMPROVEMENT, uid, request_data)

    structured = result.value
    report = structured.data
    record_id = await improvements.create_improvement(
        uid, doc["id"] if doc else None, jd_text, report, structured.reply.request_id)
    await users.set_improved_resume(uid, resume_improver.quick_access(report))
    await _log_success(endpoint, prompts.RESUME_IMPROVEMENT, uid, request_data, structured,
                       response={"analysis": report["analysis"], "jd_match": report["jd_match"]})
    return {
        "record_id": record_id,
        "analysis": report["analysis"],
        "jd_match": report["jd_match"],
        "improved_resume": report["improved_resume"],
        "improved_merged": report["improved_merged"],
        "processing_time_ms": structured.reply.processing_time_ms,
    }
