# prepmate/services/resume_improver.py
"""
Resume improvement: one canonical report for both the structured prompt and
the evaluator prompt, a plain-text merge of the rewritten sections, and the
recommendation cards kept on the user for quick access.
"""

from typing import Any, Dict, List

from prepmate.services import llm_schemas, prompts
from prepmate.services.llm_result import Result
from prepmate.services.normalizer import normalize
from prepmate.services.structured import generate_structured

MIN_RESUME_TEXT = 10

CARD_REASONS = {
    "Summary": "AI optimization for summary based on JD.",
    "Skills": "Skills aligned with JD requirements.",
    "Experience": "Experience phrasing improved to emphasize impact.",
    "Education": "Education phrasing standardized.",
}


def flatten_parsed_data(parsed: Any) -> str:
    """Rebuild plain resume text from parsed resume data."""
    if not isinstance(parsed, dict):
        return ""
    parts = []
    if parsed.get("name"):
        parts.append(f"Name: {parsed['name']}")
    if parsed.get("email"):
        parts.append(f"Email: {parsed['email']}")
    skills = parsed.get("skills") or []
    if skills:
        parts.append("Skills: " + ", ".join(skills))
    for exp in parsed.get("experience") or []:
        heading = " @ ".join(x for x in (exp.get("title"), exp.get("company")) if x)
        bullets = "\n".join(f"- {b}" for b in exp.get("bullets") or [])
        parts.append(f"Experience: {heading}\n{bullets}")
    for edu in parsed.get("education") or []:
        parts.append("Education: " + ", ".join(
            x for x in (edu.get("degree"), edu.get("institution"), edu.get("year")) if x))
    for proj in parsed.get("projects") or []:
        parts.append(f"Project: {proj.get('name', '')} - {proj.get('summary') or ''}")
    return "\n".join(parts)


def resume_text_for(record: Dict[str, Any]) -> str:
    text = record.get("resume_text") or ""
    if len(text.strip()) < MIN_RESUME_TEXT:
        text = flatten_parsed_data(record.get("parsed_data"))
    return text


def merge_improved(improved: Dict[str, Any]) -> str:
    parts = []
    summary = improved["summary"]
    if summary["improved"]:
        parts.append("Summary\n" + summary["improved"])
    if improved["skills"]:
        parts.append("Skills\n" + ", ".join(
            s["improved"] or s["original"] for s in improved["skills"] if s["improved"] or s["original"]))
    if improved["experience"]:
        lines = []
        for e in improved["experience"]:
            prefix = f"{e['title']}: " if e["title"] else ""
            lines.append(f"- {prefix}{e['improved_description'] or e['original_description']}")
        parts.append("Experience\n" + "\n".join(lines))
    if improved["education"]:
        parts.append("Education\n" + "\n".join(f"- {ed['improved'] or ed['original']}" for ed in improved["education"]))
    return "\n\n".join(parts)


def recommendation_cards(improved: Dict[str, Any]) -> List[Dict[str, Any]]:
    cards = []

    def card(section, current, better, confidence):
        cards.append({"section": section, "current": current, "improved": better,
                      "confidence": confidence, "reason": CARD_REASONS[section]})

    summary = improved["summary"]
    if summary["improved"] or summary["original"]:
        card("Summary", summary["original"], summary["improved"], summary["confidence"])
    for s in improved["skills"]:
        card("Skills", s["original"], s["improved"], s["confidence"])
    for e in improved["experience"]:
        card("Experience", e["original_description"], e["improved_description"], e["confidence"])
    for ed in improved["education"]:
        card("Education", ed["original"], ed["improved"], ed["confidence"])
    return cards


def finish_report(parsed: Any) -> Dict[str, Any]:
    """Normalize and fill improved_merged from the sections when the model gave no rewrite."""
    report = normalize(parsed, llm_schemas.IMPROVEMENT_REPORT)
    if not report["improved_merged"]:
        report["improved_merged"] = merge_improved(report["improved_resume"])
    return report


def quick_access(report: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "summary": report["analysis"]["summary"],
        "overall_score": report["analysis"]["overall_score"],
        "recommendations": recommendation_cards(report["improved_resume"]),
        "improved_resume": report["improved_merged"],
    }


async def improve(resume_text: str, jd_text: str, evaluator: bool = False) -> Result:
    """
    evaluator=True uses the scoring prompt (Upper_Snake keys); otherwise the
    structured prompt. Both retry once with the strict improvement prompt.
    """
    prompt = (prompts.resume_evaluation if evaluator else prompts.resume_improvement)(resume_text, jd_text)
    return await generate_structured(
        prompt,
        finish_report,
        strict_prompt=prompts.resume_improvement_strict(resume_text, jd_text),
    )
