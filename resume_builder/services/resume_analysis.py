# resume_builder/services/resume_analysis.py
import logging
import re
from typing import Any, List

from resume_builder.config import settings
from resume_builder.models import AnalysisResult
from resume_builder.services.gemini_service import generate_json_from_gemini

logger = logging.getLogger(__name__)

ANALYSIS_MAX_CHARS = 3000
ANALYSIS_PROMPT = """You are a senior recruiter and ATS expert. Analyze the resume below. Return JSON with the following fields:
- overall_score (0-100, based on clarity, structure, ATS keyword match, and grammar)
- strengths (list of 3-5 strong points)
- weaknesses (list of 3-5 weak points)
- ats_keywords_missing (list of keywords relevant to the candidate's field that are missing)
- suggestions (actionable bullet points to improve the resume)

Return only valid JSON without any additional text or formatting.

Resume to analyze:

{resume_text}"""

# --- Heuristic fallback ---
CONTACT_TERMS = re.compile(r"\b(?:email|phone|linkedin|github)\b", re.I)
EXPERIENCE_TERMS = re.compile(r"\b(?:experience|work|job|position|role)\b", re.I)
EDUCATION_TERMS = re.compile(r"\b(?:education|degree|university|college|school)\b", re.I)
SKILLS_TERMS = re.compile(r"\b(?:skills|technologies|programming|software)\b", re.I)

CONTACT_POINTS = 10
EXPERIENCE_POINTS = 15
EDUCATION_POINTS = 10
SKILLS_POINTS = 10
LENGTH_POINTS = 5
LENGTH_THRESHOLD_WORDS = 200

FALLBACK_MISSING_KEYWORDS = [
    "industry-specific keywords",
    "technical skills",
    "action verbs",
    "quantifiable achievements",
]
FALLBACK_SUGGESTIONS = [
    "Add more specific technical skills relevant to your target role",
    "Include quantifiable achievements with numbers and percentages",
    "Use strong action verbs to describe your accomplishments",
    "Ensure all contact information is clearly visible",
    "Tailor keywords to match job descriptions in your field",
]


def generate_fallback_analysis(resume_text: str) -> AnalysisResult:
    """Score resume text by the presence of a few term groups."""
    word_count = len(resume_text.split())
    has_contact = bool(CONTACT_TERMS.search(resume_text))
    has_experience = bool(EXPERIENCE_TERMS.search(resume_text))
    has_education = bool(EDUCATION_TERMS.search(resume_text))
    has_skills = bool(SKILLS_TERMS.search(resume_text))

    score = settings.fallback_score_base
    if has_contact:
        score += CONTACT_POINTS
    if has_experience:
        score += EXPERIENCE_POINTS
    if has_education:
        score += EDUCATION_POINTS
    if has_skills:
        score += SKILLS_POINTS
    if word_count > LENGTH_THRESHOLD_WORDS:
        score += LENGTH_POINTS

    strengths = [
        "Contact information is present" if has_contact else "Resume structure is readable",
        "Work experience section included" if has_experience else "Content is well-organized",
        "Technical skills are mentioned" if has_skills else "Professional presentation",
    ]
    weaknesses = []
    if not has_contact:
        weaknesses.append("Missing or unclear contact information")
    if not has_experience:
        weaknesses.append("Work experience section needs improvement")
    if not has_education:
        weaknesses.append("Education section could be enhanced")
    if word_count < LENGTH_THRESHOLD_WORDS:
        weaknesses.append("Resume content appears too brief")

    return AnalysisResult(
        overall_score=min(score, settings.fallback_score_cap),
        strengths=strengths,
        weaknesses=weaknesses,
        missing_keywords=list(FALLBACK_MISSING_KEYWORDS),
        suggestions=list(FALLBACK_SUGGESTIONS),
        source="fallback",
    )


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _clamp_score(value: Any) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        score = 0
    return min(max(score, 0), 100)


async def analyze_resume(resume_text: str) -> AnalysisResult:
    """LLM analysis when configured, heuristic fallback otherwise or on failure."""
    if not settings.gemini_api_key:
        logger.info("Gemini not configured; using fallback resume analysis")
        return generate_fallback_analysis(resume_text)

    truncated = resume_text
    if len(truncated) > ANALYSIS_MAX_CHARS:
        truncated = truncated[:ANALYSIS_MAX_CHARS] + "\n\n[Text truncated for analysis]"

    try:
        result = await generate_json_from_gemini(
            ANALYSIS_PROMPT.format(resume_text=truncated)
        )
    except Exception as e:
        logger.warning("AI analysis failed, using fallback analysis: %s", e)
        return generate_fallback_analysis(resume_text)

    return AnalysisResult(
        overall_score=_clamp_score(result.get("overall_score", 0)),
        strengths=_string_list(result.get("strengths")),
        weaknesses=_string_list(result.get("weaknesses")),
        missing_keywords=_string_list(result.get("ats_keywords_missing")),
        suggestions=_string_list(result.get("suggestions")),
        source="llm",
    )
