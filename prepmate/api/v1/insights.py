# prepmate/api/v1/insights.py
from fastapi import APIRouter, Depends

from prepmate.api.v1.auth import get_current_user
from prepmate.api.v1.schemas import ProfileIn, ProgressMetricsIn
from prepmate.repositories.llm_logs import log_llm_call
from prepmate.services import insights, prompts

router = APIRouter(prefix="/api/gemini", tags=["insights"])


async def _log(endpoint, prompt_type, user_id, request_data, out: insights.InsightList, field: str):
    await log_llm_call(
        endpoint, prompt_type,
        user_id=user_id,
        request_data=request_data,
        response_data={field: out.items, "fallback": out.fallback},
        processing_time_ms=out.processing_time_ms,
        success=out.error is None,
        error_message=out.error,
        request_id=out.request_id,
    )


@router.post("/analyze-progress")
async def analyze_progress(payload: ProgressMetricsIn, current_user=Depends(get_current_user)):
    out = await insights.progress_insights(payload.metrics)
    await _log("/api/gemini/analyze-progress", prompts.INSIGHTS, current_user["id"], payload.metrics, out, "insights")
    return {"insights": out.items, "processing_time_ms": out.processing_time_ms}


@router.post("/profile/analyze")
async def analyze_profile(payload: ProfileIn, current_user=Depends(get_current_user)):
    out = await insights.profile_suggestions(payload.profile)
    await _log("/api/gemini/profile/analyze", prompts.PROFILE_SUGGESTIONS, current_user["id"], payload.profile,
               out, "suggestions")
    return {"suggestions": out.items, "processing_time_ms": out.processing_time_ms}
