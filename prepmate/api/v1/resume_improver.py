# prepmate/api/v1/resume_improver.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from prepmate.api.v1.auth import get_current_user
from prepmate.api.v1.common import raise_for_llm_error, require_object_id
from prepmate.api.v1.schemas import AnalyzeIn
from prepmate.repositories import improvements, resumes, users
from prepmate.repositories.llm_logs import log_llm_call
from prepmate.services import prompts, resume_improver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/resume-improver", tags=["resume-improver"])

HISTORY_LIMIT = 20


@router.post("/analyze")
async def analyze(payload: Optional[AnalyzeIn] = None, current_user=Depends(get_current_user)):
    """Score the given (or latest) stored resume against its job description."""
    endpoint = "/api/resume-improver/analyze"
    uid = current_user["id"]
    payload = payload or AnalyzeIn()
    if payload.resume_id:
        doc = await resumes.get_resume(uid, require_object_id(payload.resume_id, "resume id"))
    else:
        doc = await resumes.latest_resume(uid)
    if not doc:
        raise HTTPException(status_code=404, detail="Resume not found")

    resume_text = resume_improver.resume_text_for(doc)
    jd_text = (doc.get("jd_text") or "").strip()
    if not resume_text.strip() or not jd_text:
        raise HTTPException(status_code=400, detail="Resume or JD not found. Please upload both.")
    request_data = {"resume_id": doc["id"], "jd_len": len(jd_text)}

    result = await resume_improver.improve(resume_text, jd_text, evaluator=True)
    if not result.ok:
        await raise_for_llm_error(result.error, endpoint, prompts.RESUME_IMPROVEMENT, uid, request_data)

    structured = result.value
    report = structured.data
    record_id = await improvements.create_improvement(uid, doc["id"], jd_text, report, structured.reply.request_id)
    await users.set_improved_resume(uid, resume_improver.quick_access(report))
    await log_llm_call(
        endpoint, prompts.RESUME_IMPROVEMENT,
        user_id=uid,
        request_data=request_data,
        response_data={"analysis": report["analysis"], "improved_resume": report["improved_resume"]},
        processing_time_ms=structured.reply.processing_time_ms,
        request_id=structured.reply.request_id,
    )
    return {"record_id": record_id, "analysis": report["analysis"], "improved_merged": report["improved_merged"]}


@router.get("/history")
async def history(current_user=Depends(get_current_user)):
    items = await improvements.list_improvements(current_user["id"], limit=HISTORY_LIMIT)
    return {"items": items}


@router.get("/report/{record_id}")
async def report(record_id: str, current_user=Depends(get_current_user)):
    doc = await improvements.get_improvement(current_user["id"], require_object_id(record_id, "report id"))
    if not doc:
        raise HTTPException(status_code=404, detail="Report not found")
    return doc
