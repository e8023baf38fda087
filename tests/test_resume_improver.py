# tests/test_resume_improver.py
import json

from prepmate.services import resume_improver
from prepmate.services.llm_result import MalformedResponse

PARSED = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "skills": ["Python", "SQL"],
    "experience": [{"company": "Acme", "title": "Engineer", "start": "", "end": "", "bullets": ["Built X", "Led Y"]}],
    "education": [{"institution": "MIT", "degree": "BSc", "year": "2020"}],
    "projects": [{"name": "Engine", "summary": "Analytical"}],
}


def test_flatten_parsed_data():
    text = resume_improver.flatten_parsed_data(PARSED)
    assert text.splitlines() == [
        "Name: Ada Lovelace",
        "Email: ada@example.com",
        "Skills: Python, SQL",
        "Experience: Engineer @ Acme",
        "- Built X",
        "- Led Y",
        "Education: BSc, MIT, 2020",
        "Project: Engine - Analytical",
    ]
    assert resume_improver.flatten_parsed_data(None) == ""


def test_short_stored_text_is_rebuilt_from_parsed_data():
    assert resume_improver.resume_text_for({"resume_text": "  hi ", "parsed_data": PARSED}).startswith("Name: Ada")
    long_text = "A resume with enough text"
    assert resume_improver.resume_text_for({"resume_text": long_text, "parsed_data": PARSED}) == long_text


def test_finish_report_merges_sections_when_no_rewrite_given():
    report = resume_improver.finish_report({
        "improvedResume": {
            "summary": {"original": "old", "improved": "Sharper summary", "confidence": 0.9},
            "skills": [{"original": "py", "improved": "Python"}, {"original": "sql", "improved": ""}],
            "experience": [{"title": "Engineer", "originalDescription": "did", "improvedDescription": "Delivered"}],
            "education": [{"original": "BSc", "improved": ""}],
        },
    })
    assert report["improved_merged"] == (
        "Summary\nSharper summary\n\n"
        "Skills\nPython, sql\n\n"
        "Experience\n- Engineer: Delivered\n\n"
        "Education\n- BSc"
    )


def test_finish_report_prefers_direct_rewrite():
    report = resume_improver.finish_report({"Improved_Resume": "  Full rewrite  ",
                                            "improvedResume": {"summary": {"improved": "x"}}})
    assert report["improved_merged"] == "Full rewrite"


def test_quick_access_cards():
    report = resume_improver.finish_report({
        "analysis": {"summary": "Nice", "overallScore": 77},
        "improvedResume": {
            "summary": {"original": "a", "improved": "b", "confidence": 0.5},
            "experience": [{"title": "T", "originalDescription": "c", "improvedDescription": "d", "confidence": 0.7}],
        },
    })
    quick = resume_improver.quick_access(report)
    assert quick["summary"] == "Nice"
    assert quick["overall_score"] == 77
    assert [c["section"] for c in quick["recommendations"]] == ["Summary", "Experience"]
    assert quick["recommendations"][1] == {
        "section": "Experience", "current": "c", "improved": "d", "confidence": 0.7,
        "reason": "Experience phrasing improved to emphasize impact.",
    }
    assert quick["improved_resume"] == report["improved_merged"]


async def test_improve_retries_with_strict_prompt(llm):
    strict_answer = {
        "summary": "Decent match",
        "overall_score": 68,
        "recommendations": [{"section": "Skills", "current": "py", "improved": "Python 3", "confidence": 0.8,
                             "reason": "spell out"}],
        "improved_resume": "Rewritten",
    }
    llm.queue("Here you go: not json", json.dumps(strict_answer))
    res = await resume_improver.improve("resume text", "jd text", evaluator=True)
    assert res.ok
    report = res.value.data
    assert report["analysis"]["overall_score"] == 68
    assert report["analysis"]["summary"] == "Decent match"
    assert report["analysis"]["recommendations"][0]["improvement"] == "Python 3"
    assert report["analysis"]["recommendations"][0]["issue"] == "spell out"
    assert report["improved_merged"] == "Rewritten"
    assert "AI Resume Evaluator" in llm.calls[0]["prompt"]
    assert "resume improvement assistant" in llm.calls[1]["system_prompt"]


async def test_improve_terminal_failure(llm):
    llm.queue("nope", "```\nstill nope\n```")
    res = await resume_improver.improve("resume", "jd")
    assert not res.ok
    assert isinstance(res.error, MalformedResponse)
    assert len(llm.calls) == 2
