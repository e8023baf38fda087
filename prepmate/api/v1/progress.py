# prepmate/api/v1/progress.py
from fastapi import APIRouter, Depends

from prepmate.api.v1.auth import get_current_user
from prepmate.api.v1.schemas import ProgressMarkIn
from prepmate.repositories import progress

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.post("/mark")
async def mark(payload: ProgressMarkIn, current_user=Depends(get_current_user)):
    doc = await progress.mark_progress(
        current_user["id"],
        payload.skill_name.strip(),
        payload.resource_link,
        payload.is_completed,
        payload.skill_total,
    )
    return {"message": "Progress updated", "progress": doc}


@router.get("/me")
async def me(current_user=Depends(get_current_user)):
    return {"progress": await progress.list_progress(current_user["id"])}
