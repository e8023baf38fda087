# prepmate/services/llm_schemas.py
"""
Canonical mapping tables for every payload the generative API returns.

Output names are snake_case. The candidate keys after the canonical one cover
the camelCase keys of earlier prompt revisions and the Upper_Snake keys of the
evaluator prompt, in priority order. "/"-prefixed keys are resolved from the
document root.
"""

from prepmate.services.normalizer import (
    Choice,
    Confidence,
    Nested,
    NestedList,
    Number,
    Text,
    TextList,
)

QUESTION_TYPES = ("behavioral", "technical", "coding", "design", "aptitude")
QUESTION_DIFFICULTIES = ("easy", "medium", "hard")
RESOURCE_TYPES = ("video", "article", "doc", "course", "repo")
CHALLENGE_DIFFICULTIES = ("Easy", "Medium", "Hard")

QUESTION_LIMIT = 10
SKILL_LIMIT = 6
INSIGHT_LIMIT = 3

DEFAULT_OVERALL_SCORE = 72
DEFAULT_ANALYSIS_SUMMARY = "Not available yet"

# --- resume parsing -------------------------------------------------------

EXPERIENCE = {
    "company": Text(("company", "Company", "employer")),
    "title": Text(("title", "Title", "role", "position")),
    "start": Text(("start", "start_date", "startDate")),
    "end": Text(("end", "end_date", "endDate")),
    "bullets": TextList(("bullets", "highlights", "responsibilities")),
}

EDUCATION = {
    "institution": Text(("institution", "school", "university")),
    "degree": Text(("degree", "Degree")),
    "year": Text(("year", "graduation_year", "graduationYear", "end")),
}

PROJECT = {
    "name": Text(("name", "title")),
    "summary": Text(("summary", "description")),
}

PARSED_RESUME = {
    "name": Text(("name", "Name", "full_name", "fullName")),
    "email": Text(("email", "Email")),
    "skills": TextList(("skills", "Skills")),
    "experience": NestedList(EXPERIENCE, ("experience", "Experience", "work_experience", "workExperience")),
    "education": NestedList(EDUCATION, ("education", "Education")),
    "projects": NestedList(PROJECT, ("projects", "Projects")),
}

# --- interview questions --------------------------------------------------

QUESTION = {
    "question": Text(("question", "Question", "text"), strip=True),
    "type": Choice(("type", "Type", "category"), QUESTION_TYPES, "technical"),
    "difficulty": Choice(("difficulty", "Difficulty", "level"), QUESTION_DIFFICULTIES, "medium"),
    "rationale": Text(("rationale", "Rationale", "reason")),
    "related_skills": TextList(("related_skills", "relatedSkills", "skills")),
}

COMPANY_QUESTION = {
    "question": Text(("question", "Question"), strip=True),
    "source": Text(("source", "Source"), default="inferred", strip=True),
    "confidence": Confidence(("confidence", "Confidence"), scale=1),
}

COMPANY_ROUND = {
    "round_name": Text(("round_name", "roundName", "name", "round"), default="General", strip=True),
    "questions": NestedList(COMPANY_QUESTION, ("questions", "Questions"), require="question"),
}

COMPANY_ARCHIVE = {
    "company": Text(("company", "companyName", "company_name"), strip=True),
    "rounds": NestedList(COMPANY_ROUND, ("rounds", "Rounds")),
    "note": Text(("note", "Note"), default="no prior questions found", strip=True),
}

# --- learning resources ---------------------------------------------------

RESOURCE = {
    "title": Text(("title", "Title", "name"), strip=True),
    "url": Text(("url", "link", "href"), strip=True),
    "type": Choice(("type", "kind"), RESOURCE_TYPES, "article"),
    "summary": Text(("summary", "description")),
    "estimated_time": Text(("estimated_time", "estimatedTime", "duration")),
}

SKILL_RESOURCES = {
    "skill": Text(("skill", "skill_name", "skillName", "name"), strip=True),
    "resources": NestedList(RESOURCE, ("resources", "Resources"), require="url"),
}

# --- resume suggestions ---------------------------------------------------

RESUME_SUGGESTIONS = {
    "missing_skills": TextList(("missing_skills", "missingSkills", "Missing Skills")),
    "content_improvements": TextList(("content_improvements", "contentImprovements", "Content Improvements")),
    "keyword_optimization": TextList(("keyword_optimization", "keywordOptimization", "Keyword Optimization")),
    "formatting_tone": TextList(("formatting_tone", "formattingTone", "Formatting / Tone")),
}

# --- resume improvement report --------------------------------------------

# each row reads one component score; the overall score falls back to their mean
_SCORE_COMPONENTS = (
    ("ats_score", "atsScore", "/ATS_Score"),
    ("grammar_score", "grammarScore", "/Grammar_Score"),
    ("clarity_score", "clarityScore", "/Clarity_Score"),
    ("/JD_Match_Score",),
    ("keyword_coverage", "keywordCoverage", "/Keyword_Match_Percentage"),
)


def mean_component_score(source, root):
    values = []
    for keys in _SCORE_COMPONENTS:
        value = Number(keys, 0, 100, default=None).resolve(source, root)
        if value is not None:
            values.append(value)
    if not values:
        return None
    return round(sum(values) / len(values), 1)


RECOMMENDATION = {
    "section": Text(("section", "Section", "field"), default="Summary", strip=True),
    "issue": Text(("issue", "Issue", "reason"), default="Unspecified issue", strip=True),
    "improvement": Text(("improvement", "AI_Suggestion", "fix", "improved"),
                        default="No improvement text provided.", strip=True),
    "confidence_score": Confidence(("confidence_score", "confidenceScore", "Confidence", "confidence"), scale=100),
}

ANALYSIS = {
    "overall_score": Number(("overall_score", "overallScore", "/overall_score", "/overallScore", "/Overall_Score"),
                            0, 100, default=DEFAULT_OVERALL_SCORE, fallback=mean_component_score),
    "ats_score": Number(("ats_score", "atsScore", "/ATS_Score", "/ats_score"), 0, 100),
    "grammar_score": Number(("grammar_score", "grammarScore", "/Grammar_Score", "/grammar_score"), 0, 100),
    "clarity_score": Number(("clarity_score", "clarityScore", "/Clarity_Score", "/clarity_score"), 0, 100),
    "keyword_coverage": Number(("keyword_coverage", "keywordCoverage", "/Keyword_Match_Percentage",
                                "/JD_Match_Score", "/jdMatch/score", "/jd_match/score"), 0, 100),
    "summary": Text(("summary", "/JD_Fit_Summary", "/summary"), default=DEFAULT_ANALYSIS_SUMMARY, strip=True),
    "missing_skills": TextList(("missing_skills", "missingSkills", "/Missing_Keywords",
                                "/jdMatch/missingSkills", "/jd_match/missing_skills")),
    "recommendations": NestedList(RECOMMENDATION, ("recommendations", "/Improvement_Recommendations",
                                                   "/recommendations")),
}

JD_MATCH = {
    "score": Number(("score", "/Keyword_Match_Percentage", "/JD_Match_Score"), 0, 100),
    "missing_skills": TextList(("missing_skills", "missingSkills", "/Missing_Keywords",
                                "/analysis/missing_skills", "/analysis/missingSkills")),
}

IMPROVED_ITEM = {
    "original": Text(("original", "current")),
    "improved": Text(("improved",)),
    "confidence": Confidence(("confidence",), scale=1),
}

IMPROVED_EXPERIENCE = {
    "title": Text(("title",)),
    "original_description": Text(("original_description", "originalDescription", "original")),
    "improved_description": Text(("improved_description", "improvedDescription", "improved")),
    "confidence": Confidence(("confidence",), scale=1),
}

IMPROVED_RESUME = {
    "summary": Nested(IMPROVED_ITEM, ("summary",)),
    "skills": NestedList(IMPROVED_ITEM, ("skills",)),
    "experience": NestedList(IMPROVED_EXPERIENCE, ("experience",)),
    "education": NestedList(IMPROVED_ITEM, ("education",)),
}

IMPROVEMENT_REPORT = {
    "analysis": Nested(ANALYSIS, ("analysis",)),
    "jd_match": Nested(JD_MATCH, ("jd_match", "jdMatch")),
    "improved_resume": Nested(IMPROVED_RESUME, ("improved_resume", "improvedResume")),
    # the evaluator prompt returns the rewritten resume as one string
    "improved_merged": Text(("improved_merged", "improvedMerged", "/Improved_Resume",
                             "/improvedResume", "/improved_resume"), strip=True),
}

# --- daily challenge and short insight lists ------------------------------

DAILY_CHALLENGE = {
    "challenge_type": Text(("challenge_type", "challengeType", "type"), default="general", strip=True),
    "difficulty": Choice(("difficulty", "Difficulty"), CHALLENGE_DIFFICULTIES, "Medium"),
    "question": Text(("question", "Question"), strip=True),
    "answer": Text(("answer", "Answer", "solution")),
}

INSIGHTS = {
    "insights": TextList(("insights", "Insights"), limit=INSIGHT_LIMIT),
}

PROFILE_SUGGESTIONS = {
    "suggestions": TextList(("suggestions", "Suggestions"), limit=INSIGHT_LIMIT),
}
