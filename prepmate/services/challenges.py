# prepmate/services/challenges.py
"""Daily challenge generation with a randomized canned fallback."""

import logging
import random
from datetime import datetime, timedelta
from typing import Any, Dict, Optional

from prepmate.services import llm_schemas, prompts
from prepmate.services.normalizer import normalize
from prepmate.services.structured import generate_structured

logger = logging.getLogger(__name__)

SAMPLE_CHALLENGES = (
    {"challenge_type": "coding", "difficulty": "Medium",
     "question": "Implement a function to remove duplicates from an array.",
     "answer": "Use a set, or filter while tracking seen values."},
    {"challenge_type": "aptitude", "difficulty": "Easy",
     "question": "If a train travels 60 km in 1.5 hours, what is its speed?",
     "answer": "Speed = Distance / Time = 60 / 1.5 = 40 km/h"},
    {"challenge_type": "behavioral", "difficulty": "Medium",
     "question": "Describe a time you overcame a team challenge.",
     "answer": "Explain the context, your role, the action you took and the result."},
)


def start_of_day(now: Optional[datetime] = None) -> datetime:
    """Midnight of the current UTC day, matching the naive UTC timestamps stored on records."""
    now = now or datetime.utcnow()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def history_cutoff(days: int, now: Optional[datetime] = None) -> datetime:
    days = max(1, min(90, days))
    return (now or datetime.utcnow()) - timedelta(days=days)


def build_profile(user: Dict[str, Any], resume: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Profile fields for the challenge prompt; the latest resume fills gaps in the user record."""
    resume = resume or {}
    parsed = resume.get("parsed_data") or {}
    return {
        "name": user.get("name") or parsed.get("name"),
        "skills": user.get("skills") or parsed.get("skills") or [],
        "experience_level": user.get("experience_level"),
        "resume_text": (user.get("resume_text") or resume.get("resume_text") or "")[:1500],
        "jd_text": (user.get("jd_text") or resume.get("jd_text") or "")[:1500],
    }


def _accept(challenge) -> Optional[str]:
    return None if challenge["question"] else "challenge has no question"


async def generate_challenge(profile: Dict[str, Any], rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """Never fails: any upstream or parse problem picks a sample challenge."""
    result = await generate_structured(
        prompts.daily_challenge(profile),
        lambda v: normalize(v, llm_schemas.DAILY_CHALLENGE),
        retry=False,
        accept=_accept,
    )
    if result.ok:
        return result.value.data
    logger.warning("daily challenge generation fell back to a sample (%s)", result.error.reason)
    return dict((rng or random).choice(SAMPLE_CHALLENGES))
