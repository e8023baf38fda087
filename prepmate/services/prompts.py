# prepmate/services/prompts.py
"""
Prompt builders. Each returns (prompt_type, system_prompt, user_prompt).
"""

import json
from typing import Any, Dict, Tuple

Prompt = Tuple[str, str, str]

PARSE_RESUME = "parse_resume"
QUESTIONS = "questions"
COMPANY_ARCHIVE = "company_archive"
RESOURCES = "resources"
RESUME_SUGGESTIONS = "resume_suggestions"
RESUME_IMPROVEMENT = "resume_improvement"
DAILY_CHALLENGE = "daily_challenge"
INSIGHTS = "insights"
PROFILE_SUGGESTIONS = "profile_suggestions"

STRICT_SUFFIX = (
    "Return bare JSON only. No prose, no explanations, no markdown, no code fences. "
    "The first character of your answer must be { or [."
)


def strict(system_prompt: str) -> str:
    return f"{system_prompt}\n\n{STRICT_SUFFIX}" if system_prompt else STRICT_SUFFIX


def parse_resume(resume_text: str) -> Prompt:
    system = (
        "You are an extraction agent. Output ONLY valid JSON matching this schema: "
        '{ "name": "", "email": "", "skills": [""], '
        '"experience": [{"company": "", "title": "", "start": "", "end": "", "bullets": [""]}], '
        '"education": [{"institution": "", "degree": "", "year": ""}], '
        '"projects": [{"name": "", "summary": ""}] }.'
    )
    user = (
        f"Here is the resume text: {resume_text}. If a field is missing, use an empty "
        "string or an empty list for that key. Return ONLY the JSON object."
    )
    return PARSE_RESUME, system, user


def questions(parsed_resume: Dict[str, Any], jd_text: str) -> Prompt:
    system = (
        "You are an expert placement trainer. Return ONLY a JSON array of exactly 10 question objects: "
        '[{"question": "", "type": "behavioral|technical|coding|design|aptitude", '
        '"difficulty": "easy|medium|hard", "rationale": "", "related_skills": [""]}]'
    )
    user = (
        f"Use this resume JSON: {json.dumps(parsed_resume, default=str)} and this job description: {jd_text}. "
        "Generate 10 unique interview questions targeted to the job and the candidate. Prioritize gaps "
        "between the candidate's skills and the job, and include at least 2 behavioral questions."
    )
    return QUESTIONS, system, user


def company_archive(company_name: str) -> Prompt:
    system = (
        f"You are an interviewer-research agent. For the company {company_name}, return a JSON object "
        '{ "company": "", "rounds": [ { "round_name": "", "questions": [ { "question": "", "source": "", '
        '"confidence": 0.0 } ] } ], "note": "" }.'
    )
    user = (
        f"Produce round-wise previous-year interview questions for {company_name}. Give each question a "
        'source when known and a confidence between 0.0 and 1.0. Mark unsourced questions as "inferred" '
        'with a lower confidence. If nothing is known, return "rounds": [] and "note": "no prior questions found".'
    )
    return COMPANY_ARCHIVE, system, user


def resources(jd_text: str) -> Prompt:
    system = (
        "You are a learning-content curator. Output ONLY a JSON array of up to 6 skills, each "
        '{ "skill": "", "resources": [ { "title": "", "url": "", "type": "video|article|doc|course|repo", '
        '"summary": "", "estimated_time": "30m|2h|10h" } ] }. Give 2-3 resources per skill.'
    )
    user = (
        f"Extract the key technical skills from this job description and curate resources: {jd_text}. "
        "Limit to the 6 most impactful skills."
    )
    return RESOURCES, system, user


def resume_suggestions(resume_text: str, jd_text: str) -> Prompt:
    system = (
        "You are a professional resume analyst. Output ONLY valid JSON with this schema: "
        '{ "missing_skills": [""], "content_improvements": [""], "keyword_optimization": [""], '
        '"formatting_tone": [""] }'
    )
    user = (
        "Compare the resume and job description below. List missing skills, content improvements, "
        f"keyword optimizations and formatting or tone fixes.\n\nResume:\n{resume_text}\n\n"
        f"Job Description:\n{jd_text}"
    )
    return RESUME_SUGGESTIONS, system, user


def resume_evaluation(resume_text: str, jd_text: str) -> Prompt:
    system = "Return ONLY valid JSON using exactly the keys shown. No markdown fences."
    user = (
        "You are an AI Resume Evaluator. Given a resume and a job description, analyze and return:\n"
        "{\n"
        '  "JD_Match_Score": <0-100>,\n'
        '  "ATS_Score": <0-100>,\n'
        '  "Grammar_Score": <0-100>,\n'
        '  "Clarity_Score": <0-100>,\n'
        '  "Keyword_Match_Percentage": <0-100>,\n'
        '  "JD_Fit_Summary": "<short paragraph>",\n'
        '  "Missing_Keywords": ["keyword"],\n'
        '  "Improvement_Recommendations": [{"Section": "", "Issue": "", "AI_Suggestion": "", '
        '"Confidence": "<low/medium/high>"}],\n'
        '  "Improved_Resume": "<rewritten resume text>"\n'
        "}\n"
        f"Resume:\n{resume_text}\n\nJob Description:\n{jd_text}"
    )
    return RESUME_IMPROVEMENT, system, user


def resume_improvement_strict(resume_text: str, jd_text: str) -> Prompt:
    system = (
        "You are a professional resume improvement assistant. Return ONLY valid JSON with this exact "
        'schema and no markdown: { "summary": "", "overall_score": 0, "recommendations": [ { "section": "", '
        '"current": "", "improved": "", "confidence": 0.0, "reason": "" } ], "improved_resume": "" }'
    )
    user = (
        "Compare RESUME vs JD. Identify weak phrasing and misalignment and rewrite professionally. "
        f"Only output JSON as above.\n\nRESUME:\n{resume_text}\n\nJD:\n{jd_text}"
    )
    return RESUME_IMPROVEMENT, system, user


def daily_challenge(profile: Dict[str, Any]) -> Prompt:
    skills = profile.get("skills") or []
    system = (
        'Return ONLY valid JSON: {"challenge_type": "coding|aptitude|behavioral|conceptual", '
        '"difficulty": "Easy|Medium|Hard", "question": "", "answer": ""}'
    )
    user = (
        "You are a placement coach generating one daily personalized interview challenge.\n"
        f"- Name: {profile.get('name') or 'User'}\n"
        f"- Skills: {', '.join(skills) if skills else 'programming, problem-solving'}\n"
        f"- Experience level: {profile.get('experience_level') or 'Intermediate'}\n"
        f"- Resume summary: {profile.get('resume_text') or 'General software engineering resume'}\n"
        f"- Target job description: {profile.get('jd_text') or 'Generic placement-oriented job description'}\n"
        "Pick coding, aptitude, behavioral or conceptual based on the resume and job description."
    )
    return DAILY_CHALLENGE, system, user


def progress_insights(metrics: Dict[str, Any]) -> Prompt:
    system = 'Return ONLY valid JSON with this exact schema: { "insights": ["", "", ""] }'
    user = (
        "Given these user progress metrics, produce three concise insights "
        f"(trend, strength, recommendation):\n{json.dumps(metrics, default=str)}"
    )
    return INSIGHTS, system, user


def profile_suggestions(profile: Dict[str, Any]) -> Prompt:
    system = 'Return ONLY valid JSON with this exact schema: { "suggestions": ["", "", ""] }'
    user = (
        "Review this placement profile and give three short, actionable suggestions to improve it:\n"
        f"{json.dumps(profile, default=str)}"
    )
    return PROFILE_SUGGESTIONS, system, user


def resume_improvement(resume_text: str, jd_text: str) -> Prompt:
    system = (
        "You are an expert resume reviewer trained in ATS optimization and technical hiring. Return ONLY "
        "valid JSON (no markdown, no commentary) with this exact schema: "
        '{ "analysis": { "summary": "", "overall_score": 0, "ats_score": 0, "grammar_score": 0, '
        '"clarity_score": 0, "keyword_coverage": 0, "missing_skills": [""], "recommendations": [ '
        '{ "section": "Summary|Skills|Projects|Experience|Education", "issue": "", "improvement": "", '
        '"confidence_score": 0 } ] }, '
        '"jd_match": { "score": 0, "missing_skills": [""] }, '
        '"improved_resume": { "summary": { "original": "", "improved": "", "confidence": 0.0 }, '
        '"skills": [ { "original": "", "improved": "", "confidence": 0.0 } ], '
        '"experience": [ { "title": "", "original_description": "", "improved_description": "", '
        '"confidence": 0.0 } ], "education": [ { "original": "", "improved": "", "confidence": 0.0 } ] } }'
    )
    user = (
        "Compare the provided RESUME and JOB DESCRIPTION. Analyze alignment, missing elements, phrasing, "
        "spelling, grammar and formatting. Suggest improved, professional, ATS-friendly versions for weak "
        f"areas.\n\nRESUME:\n{resume_text}\n\nJOB DESCRIPTION:\n{jd_text}"
    )
    return RESUME_IMPROVEMENT, system, user
