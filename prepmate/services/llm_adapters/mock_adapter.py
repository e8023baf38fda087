import asyncio
import json

# deterministic canned payloads keyed by prompt type, for local development
_CANNED = {
    "parse_resume": {
        "name": "Sample Candidate",
        "email": "candidate@example.com",
        "skills": ["Python", "SQL", "REST APIs"],
        "experience": [{"company": "Acme", "title": "Software Intern", "start": "2023-06",
                        "end": "2023-12", "bullets": ["Built internal dashboards"]}],
        "education": [{"institution": "State University", "degree": "B.Tech CSE", "year": "2024"}],
        "projects": [{"name": "Placement Tracker", "summary": "FastAPI service for tracking applications"}],
    },
    "questions": [
        {"question": f"Sample question {i}", "type": "behavioral" if i < 3 else "technical",
         "difficulty": "medium", "rationale": "Covers a skill named in the job description.",
         "related_skills": ["Python"]}
        for i in range(1, 11)
    ],
    "company_archive": {
        "company": "",
        "rounds": [{"round_name": "Technical", "questions": [
            {"question": "Explain how a hash map handles collisions.", "source": "inferred", "confidence": 0.5},
        ]}],
        "note": "",
    },
    "resources": [
        {"skill": "Python", "resources": [
            {"title": "The Python Tutorial", "url": "https://docs.python.org/3/tutorial/",
             "type": "doc", "summary": "Official language tutorial.", "estimated_time": "10h"},
        ]},
    ],
    "resume_suggestions": {
        "missing_skills": ["Docker"],
        "content_improvements": ["Quantify project impact."],
        "keyword_optimization": ["Mention REST APIs explicitly."],
        "formatting_tone": ["Use consistent tense in bullets."],
    },
    "resume_improvement": {
        "JD_Match_Score": 70,
        "ATS_Score": 75,
        "Grammar_Score": 85,
        "Clarity_Score": 80,
        "Keyword_Match_Percentage": 65,
        "JD_Fit_Summary": "Solid fundamentals; cloud tooling is missing.",
        "Missing_Keywords": ["Docker", "AWS"],
        "Improvement_Recommendations": [
            {"Section": "Skills", "Issue": "No cloud tooling", "AI_Suggestion": "Add Docker and AWS basics.",
             "Confidence": "high"},
        ],
        "Improved_Resume": "Sample Candidate\nSkills: Python, SQL, REST APIs, Docker",
    },
    "daily_challenge": {
        "challenge_type": "coding",
        "difficulty": "Medium",
        "question": "Implement a function to remove duplicates from a list while keeping order.",
        "answer": "Track seen items in a set and append unseen ones to the result.",
    },
    "insights": {"insights": [
        "Your completion rate is trending up.",
        "You are strongest in Python resources.",
        "Schedule one challenge per day to keep momentum.",
    ]},
    "profile_suggestions": {"suggestions": [
        "Add measurable outcomes to your projects.",
        "List the tools you used in each role.",
        "Keep your target job description up to date.",
    ]},
}


async def generate(prompt_type: str, prompt: str, system_prompt: str = "") -> str:
    await asyncio.sleep(0)  # yield
    payload = _CANNED.get(prompt_type, {})
    return "```json\n" + json.dumps(payload, indent=2) + "\n```"
