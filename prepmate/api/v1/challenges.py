# prepmate/api/v1/challenges.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from prepmate.api.v1.auth import get_current_user
from prepmate.api.v1.common import require_object_id
from prepmate.api.v1.schemas import ChallengeSubmitIn
from prepmate.repositories import challenges as challenge_repo
from prepmate.repositories import resumes
from prepmate.services import challenges

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/challenges", tags=["challenges"])

HISTORY_LIMIT = 200


async def _generate_for(user):
    resume = await resumes.latest_resume(user["id"])
    challenge = await challenges.generate_challenge(challenges.build_profile(user, resume))
    return await challenge_repo.create_challenge(user["id"], challenge)


@router.get("/today")
async def today(current_user=Depends(get_current_user)):
    existing = await challenge_repo.challenge_since(current_user["id"], challenges.start_of_day())
    if existing:
        return {"challenge": existing}
    return {"challenge": await _generate_for(current_user)}


@router.post("/refresh")
async def refresh(current_user=Depends(get_current_user)):
    """Replace today's challenge with a freshly generated one."""
    removed = await challenge_repo.delete_since(current_user["id"], challenges.start_of_day())
    logger.info("refreshing daily challenge for %s (%d removed)", current_user["id"], removed)
    return {"challenge": await _generate_for(current_user)}


@router.post("/submit")
async def submit(payload: ChallengeSubmitIn, current_user=Depends(get_current_user)):
    challenge_id = require_object_id(payload.challenge_id, "challenge id")
    doc = await challenge_repo.set_status(current_user["id"], challenge_id, payload.status)
    if not doc:
        raise HTTPException(status_code=404, detail="Challenge not found")
    return {"message": "Challenge updated", "challenge": doc}


@router.get("/history")
async def history(days: int = Query(7), current_user=Depends(get_current_user)):
    items = await challenge_repo.list_challenges(
        current_user["id"], challenges.history_cutoff(days), limit=HISTORY_LIMIT)
    return {"history": items}
