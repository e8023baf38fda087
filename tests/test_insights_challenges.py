# tests/test_insights_challenges.py
import random
from datetime import datetime

import httpx

from prepmate.services import challenges, insights


async def test_insights_from_json(llm):
    llm.queue('```json\n{"insights": ["one", "two", "three", "four"]}\n```')
    out = await insights.progress_insights({"streak": 3})
    assert out.items == ["one", "two", "three"]
    assert not out.fallback
    assert len(llm.calls) == 1


async def test_insights_split_lines_when_not_json(llm):
    llm.queue("- Practice SQL joins\n\n* Review system design\n3. Keep your streak\n4) extra")
    out = await insights.profile_suggestions({"goal": "SDE"})
    assert out.items == ["Practice SQL joins", "Review system design", "Keep your streak"]
    assert not out.fallback


async def test_insights_bare_json_list_is_used_as_items(llm):
    llm.queue('[\n  "Practice SQL joins",\n  "Finish two Docker labs",\n  "Mock interview",\n  "extra"\n]')
    out = await insights.progress_insights({})
    assert out.items == ["Practice SQL joins", "Finish two Docker labs", "Mock interview"]
    assert not out.fallback


async def test_insights_json_of_wrong_shape_falls_back(llm):
    llm.queue('"just one string"')
    out = await insights.profile_suggestions({})
    assert out.items == insights.PROFILE_FALLBACK
    assert out.fallback


async def test_insights_fallback_on_empty_answer(llm):
    llm.queue('{"insights": []}')
    out = await insights.progress_insights({})
    assert out.items == insights.PROGRESS_FALLBACK
    assert out.fallback


async def test_insights_fallback_on_upstream_failure(llm):
    llm.queue(httpx.ReadTimeout("slow"))
    out = await insights.profile_suggestions({})
    assert out.items == insights.PROFILE_FALLBACK
    assert out.fallback
    assert "ReadTimeout" in out.error
    assert len(llm.calls) == 1


def test_start_of_day_and_history_cutoff():
    now = datetime(2024, 5, 17, 15, 42, 7, 123)
    assert challenges.start_of_day(now) == datetime(2024, 5, 17)
    assert challenges.history_cutoff(7, now) == datetime(2024, 5, 10, 15, 42, 7, 123)
    assert challenges.history_cutoff(0, now) == datetime(2024, 5, 16, 15, 42, 7, 123)
    assert challenges.history_cutoff(1000, now) == datetime(2024, 2, 17, 15, 42, 7, 123)


def test_start_of_day_defaults_to_utc_midnight():
    before = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    day = challenges.start_of_day()
    after = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    assert day in (before, after)
    assert day.tzinfo is None


def test_build_profile_prefers_user_fields():
    user = {"name": "Ada", "skills": ["Go"]}
    resume = {"resume_text": "text", "jd_text": "jd", "parsed_data": {"name": "Other", "skills": ["SQL"]}}
    profile = challenges.build_profile(user, resume)
    assert profile["name"] == "Ada"
    assert profile["skills"] == ["Go"]
    assert profile["resume_text"] == "text"
    assert challenges.build_profile({}, resume)["skills"] == ["SQL"]
    assert challenges.build_profile({}, None)["skills"] == []


async def test_generate_challenge_normalizes_answer(llm):
    llm.queue('{"challengeType": "sql", "difficulty": "hard", "question": "Find duplicates", "answer": "GROUP BY"}')
    out = await challenges.generate_challenge({"skills": ["SQL"]})
    assert out == {"challenge_type": "sql", "difficulty": "Hard", "question": "Find duplicates", "answer": "GROUP BY"}


async def test_generate_challenge_falls_back_without_retry(llm):
    llm.queue('{"difficulty": "Easy"}')
    out = await challenges.generate_challenge({}, rng=random.Random(0))
    assert out in [dict(c) for c in challenges.SAMPLE_CHALLENGES]
    assert len(llm.calls) == 1
