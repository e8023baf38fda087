# prepmate/api/v1/resumes.py
"""
Resume upload and management.
- POST accepts multipart: jd_text, optional resume_text, optional resume_file (pdf/docx/txt, 5 MB)
- The resume is parsed by the LLM into PARSED_RESUME before it is stored
- PUT /profile/update writes the editable profile fields on the user
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from prepmate.api.v1.auth import get_current_user
from prepmate.api.v1.common import raise_for_llm_error, require_object_id
from prepmate.api.v1.schemas import ProfileUpdateIn
from prepmate.repositories import resumes, users
from prepmate.repositories.llm_logs import log_llm_call
from prepmate.services import generation, prompts
from prepmate.services.parse_utils import (
    MAX_UPLOAD_BYTES,
    UnsupportedFile,
    check_upload,
    extract_text_auto,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["resumes"])

ENDPOINT = "/api/user/resume"


@router.post("/resume", status_code=201)
async def upload_resume(
    jd_text: str = Form(...),
    resume_text: Optional[str] = Form(None),
    resume_file: Optional[UploadFile] = File(None),
    current_user=Depends(get_current_user),
):
    metadata = {}
    text = (resume_text or "").strip()
    if resume_file is not None and resume_file.filename:
        # bounded read: one byte past the limit is enough to reject
        data = await resume_file.read(MAX_UPLOAD_BYTES + 1)
        try:
            check_upload(resume_file.filename, len(data))
        except UnsupportedFile as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        extracted, kind = extract_text_auto(data)
        logger.info("extracted %d chars from %s (%s)", len(extracted), resume_file.filename, kind)
        text = extracted.strip() or text
        metadata = {
            "file_name": resume_file.filename,
            "file_size": len(data),
            "mime_type": resume_file.content_type,
            "upload_date": datetime.utcnow(),
        }
    if not text:
        raise HTTPException(status_code=400, detail="Provide resume_text or a resume_file")
    if not jd_text.strip():
        raise HTTPException(status_code=400, detail="jd_text is required")

    request_data = {"resume_text": text, "jd_len": len(jd_text)}
    result = await generation.parse_resume(text)
    if not result.ok:
        await raise_for_llm_error(result.error, ENDPOINT, prompts.PARSE_RESUME, current_user["id"], request_data)

    parsed = result.value
    resume_id = await resumes.create_resume(current_user["id"], text, jd_text.strip(), parsed.data, metadata)
    await log_llm_call(
        ENDPOINT, prompts.PARSE_RESUME,
        user_id=current_user["id"],
        request_data=request_data,
        response_data=parsed.data,
        processing_time_ms=parsed.reply.processing_time_ms,
        request_id=parsed.reply.request_id,
    )
    return {
        "resume_id": resume_id,
        "parsed_data": parsed.data,
        "processing_time_ms": parsed.reply.processing_time_ms,
    }


@router.get("/resume")
async def list_resumes(current_user=Depends(get_current_user)):
    items = await resumes.list_resumes(current_user["id"])
    return {"items": items, "count": len(items)}


@router.get("/resume/{resume_id}")
async def get_resume(resume_id: str, current_user=Depends(get_current_user)):
    doc = await resumes.get_resume(current_user["id"], require_object_id(resume_id, "resume id"))
    if not doc:
        raise HTTPException(status_code=404, detail="Resume not found")
    return doc


@router.delete("/resume/{resume_id}")
async def delete_resume(resume_id: str, current_user=Depends(get_current_user)):
    ok = await resumes.delete_resume(current_user["id"], require_object_id(resume_id, "resume id"))
    if not ok:
        raise HTTPException(status_code=404, detail="Resume not found")
    return {"deleted": True}


@router.put("/profile/update")
async def update_profile(payload: ProfileUpdateIn, current_user=Depends(get_current_user)):
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No profile fields to update")
    await users.update_profile(current_user["id"], fields)
    return {"user": users.public_user(await users.get_user(current_user["id"]))}
