from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, model_serializer
from pydantic.alias_generators import to_camel


class ResumeBaseModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True  # Accepts both job_title and jobTitle


ProficiencyLevel = Literal["beginner", "intermediate", "advanced", "native"]


# --- Parsed (heuristic parser output) ---
class PersonalInfo(ResumeBaseModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    address: Optional[str] = None
    professional_summary: Optional[str] = None


class WorkExperience(ResumeBaseModel):
    id: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)


class Education(ResumeBaseModel):
    id: str
    degree: Optional[str] = None
    institution: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    gpa: Optional[str] = None
    relevant_coursework: List[str] = Field(default_factory=list)
    honors: List[str] = Field(default_factory=list)


class Certification(ResumeBaseModel):
    id: str
    name: Optional[str] = None
    issuing_organization: Optional[str] = None
    issue_date: Optional[str] = None


class Project(ResumeBaseModel):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class VolunteerExperience(ResumeBaseModel):
    id: str
    role: Optional[str] = None
    organization: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    achievements: List[str] = Field(default_factory=list)


class Award(ResumeBaseModel):
    id: str
    name: Optional[str] = None
    category: str = "other"


class Language(ResumeBaseModel):
    id: str
    name: Optional[str] = None
    proficiency: ProficiencyLevel = "beginner"


class Reference(ResumeBaseModel):
    id: str
    name: Optional[str] = None


class ParsedResume(ResumeBaseModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    work_experience: List[WorkExperience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    volunteer_experience: List[VolunteerExperience] = Field(default_factory=list)
    awards: List[Award] = Field(default_factory=list)
    languages: List[Language] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)


# --- Sanitized (render-safe) ---
# Every str field here is trimmed, bounded and never "" (a single space stands in).
class SanitizedPersonalInfo(ResumeBaseModel):
    full_name: str
    email: str = " "
    phone: str = " "
    address: str = " "
    linkedin: str = " "
    github: str = " "
    portfolio: str = " "
    professional_summary: str = " "
    date_of_birth: str = " "
    nationality: str = " "
    location: str = " "
    languages: List[str] = Field(default_factory=list)


class SanitizedWorkExperience(ResumeBaseModel):
    id: str
    job_title: str = " "
    company: str = " "
    location: str = " "
    start_date: str = " "
    end_date: str = " "
    achievements: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)


class SanitizedEducation(ResumeBaseModel):
    id: str
    degree: str = " "
    institution: str = " "
    location: str = " "
    start_date: str = " "
    end_date: str = " "
    gpa: str = " "
    relevant_coursework: List[str] = Field(default_factory=list)
    honors: List[str] = Field(default_factory=list)


class SanitizedCertification(ResumeBaseModel):
    id: str
    name: str = " "
    issuing_organization: str = " "
    issue_date: str = " "
    expiration_date: str = " "
    credential_id: str = " "


class SanitizedProject(ResumeBaseModel):
    id: str
    name: str = " "
    description: str = " "
    start_date: str = " "
    end_date: str = " "
    github_url: str = " "
    live_url: str = " "
    technologies: List[str] = Field(default_factory=list)
    highlights: List[str] = Field(default_factory=list)


class SanitizedVolunteerExperience(ResumeBaseModel):
    id: str
    role: str = " "
    organization: str = " "
    location: str = " "
    start_date: str = " "
    end_date: str = " "
    current: bool = False
    description: str = " "
    impact: str = " "
    achievements: List[str] = Field(default_factory=list)
    hours_per_week: Optional[float] = None
    total_hours: Optional[float] = None

    @model_serializer(mode="wrap")
    def _omit_missing_hours(self, handler):
        # Hours that could not be coerced are left out rather than sent as null
        data = handler(self)
        for key in ("hours_per_week", "hoursPerWeek", "total_hours", "totalHours"):
            if key in data and data[key] is None:
                del data[key]
        return data


class SanitizedAward(ResumeBaseModel):
    id: str
    name: str = " "
    organization: str = " "
    date: str = " "
    description: str = " "
    category: str = " "


class SanitizedLanguage(ResumeBaseModel):
    id: str
    name: str = " "
    proficiency: str = " "
    certification: str = " "


class SanitizedReference(ResumeBaseModel):
    id: str
    name: str = " "
    title: str = " "
    company: str = " "
    email: str = " "
    phone: str = " "
    relationship: str = " "


class SanitizedResume(ResumeBaseModel):
    personal_info: SanitizedPersonalInfo
    work_experience: List[SanitizedWorkExperience] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    education: List[SanitizedEducation] = Field(default_factory=list)
    certifications: List[SanitizedCertification] = Field(default_factory=list)
    projects: List[SanitizedProject] = Field(default_factory=list)
    volunteer_experience: List[SanitizedVolunteerExperience] = Field(
        default_factory=list
    )
    awards: List[SanitizedAward] = Field(default_factory=list)
    languages: List[SanitizedLanguage] = Field(default_factory=list)
    references: List[SanitizedReference] = Field(default_factory=list)
    hobbies: List[str] = Field(default_factory=list)
    available_on_request: bool = False


# --- Analysis ---
class AnalysisResult(ResumeBaseModel):
    overall_score: int = Field(ge=0, le=100)
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    missing_keywords: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    source: Literal["llm", "fallback"] = "fallback"


# --- API payloads ---
class ParseResumeResponse(ResumeBaseModel):
    success: bool = True
    text: str
    parsed_data: ParsedResume
    file_name: Optional[str] = None
    file_size: int
    mime_type: str
    extracted_length: int


class GeneratePdfRequest(ResumeBaseModel):
    # Untrusted client JSON; every field goes through the sanitizer
    resume_data: Any = None
    template_id: Optional[str] = None


class AnalyzeResumeResponse(AnalysisResult):
    success: bool = True
