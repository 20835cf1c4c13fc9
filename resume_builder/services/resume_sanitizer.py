# resume_builder/services/resume_sanitizer.py
"""
Untrusted resume JSON -> SanitizedResume.

Every field read goes through one of three coercions (string, list, number),
so whatever shape the client sends, the renderer only ever sees non-empty,
bounded, control-character-free strings.
"""
import logging
import math
import re
from typing import Any, Callable, List, Mapping, Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_snake

from resume_builder.config import settings
from resume_builder.errors import ResumeValidationError
from resume_builder.models import (
    SanitizedAward,
    SanitizedCertification,
    SanitizedEducation,
    SanitizedLanguage,
    SanitizedPersonalInfo,
    SanitizedProject,
    SanitizedReference,
    SanitizedResume,
    SanitizedVolunteerExperience,
    SanitizedWorkExperience,
)
from resume_builder.parsers.extract_resume_from_sections.lib.ids import (
    resolve_id_factory,
)
from resume_builder.parsers.types import IdFactory

logger = logging.getLogger(__name__)

# --- Field maxima ---
NAME_MAX = 100
EMAIL_MAX = 100
PHONE_MAX = 50
DATE_MAX = 50
ID_MAX = 50
ADDRESS_MAX = 200
GPA_MAX = 20
URL_MAX = 200
SHORT_TEXT_MAX = 100  # titles, companies, institutions, locations
MEDIUM_TEXT_MAX = 500  # award descriptions, volunteer impact
LONG_TEXT_MAX = 1000  # summaries, long descriptions
LIST_ITEM_MAX = 1000
SKILL_MAX = 100
LANGUAGE_NAME_MAX = 50

ELLIPSIS = "..."
BLANK = " "

# U+nFFFE and U+nFFFF on the supplementary planes 1-16
_SUPPLEMENTARY_NONCHARACTERS = "".join(
    chr((plane << 16) | low) for plane in range(1, 17) for low in (0xFFFE, 0xFFFF)
)
# C0 controls except \t \n \r, DEL + C1 controls, non-characters, lone surrogates
_UNSAFE_CHARS_RE = re.compile(
    r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f\ufdd0-\ufdef\ufffe\uffff\ud800-\udfff"
    + _SUPPLEMENTARY_NONCHARACTERS
    + "]"
)
_EMAIL_NAME_SEPARATORS_RE = re.compile(r"[._-]")
_WORD_START_RE = re.compile(r"\b\w")


# --- Coercions ---
def sanitize_string(value: Any, max_length: int = LONG_TEXT_MAX) -> str:
    if value is None:
        text = ""
    elif isinstance(value, str):
        text = value
    else:
        text = str(value)

    text = _UNSAFE_CHARS_RE.sub("", text).strip()
    if len(text) > max_length:
        text = text[: max_length - len(ELLIPSIS)] + ELLIPSIS
    return text or BLANK


def sanitize_list(value: Any, max_item_length: int = LIST_ITEM_MAX) -> List[str]:
    """list -> items, "a, b" -> ["a", "b"], scalar -> [scalar], None -> []."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        items = [value]

    sanitized = []
    for item in items:
        if item is None:
            continue
        text = sanitize_string(item, max_item_length)
        if text.strip():
            sanitized.append(text)
    return sanitized


def sanitize_number(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def sanitize_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


# --- Field access on untrusted mappings ---
def _get(data: Mapping, name: str, default: Any = None) -> Any:
    """Read a camelCase key, falling back to its snake_case spelling."""
    if name in data:
        return data[name]
    return data.get(to_snake(name), default)


def _mapping_items(value: Any) -> List[Mapping]:
    # Non-mapping entries in a structured section carry nothing we can place
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, Mapping)]
    return []


def _entry_id(item: Mapping, id_factory: IdFactory) -> str:
    raw_id = _get(item, "id")
    if raw_id is None or not str(raw_id).strip():
        raw_id = id_factory()
    return sanitize_string(raw_id, ID_MAX)


# --- Name resolution ---
def _name_from_email(email: Any) -> Optional[str]:
    email_text = sanitize_string(email, EMAIL_MAX).strip()
    if not email_text:
        return None
    local_part = email_text.split("@", 1)[0]
    words = _EMAIL_NAME_SEPARATORS_RE.sub(" ", local_part).split()
    if not words:
        return None
    return _WORD_START_RE.sub(lambda m: m.group(0).upper(), " ".join(words))


def resolve_full_name(
    full_name: Any,
    email: Any,
    placeholder: Optional[str] = None,
    require_identity: bool = False,
) -> str:
    """Explicit name, else a name derived from the email local part, else a placeholder."""
    name = sanitize_string(full_name, NAME_MAX)
    if name.strip():
        return name

    derived = _name_from_email(email)
    if derived:
        return sanitize_string(derived, NAME_MAX)

    if require_identity:
        raise ResumeValidationError(
            "Resume needs a full name or an email address to identify its owner"
        )
    return sanitize_string(placeholder or settings.name_placeholder, NAME_MAX)


# --- Sections ---
def sanitize_personal_info(
    data: Mapping, placeholder: Optional[str], require_identity: bool
) -> SanitizedPersonalInfo:
    return SanitizedPersonalInfo(
        full_name=resolve_full_name(
            _get(data, "fullName"),
            _get(data, "email"),
            placeholder=placeholder,
            require_identity=require_identity,
        ),
        email=sanitize_string(_get(data, "email"), EMAIL_MAX),
        phone=sanitize_string(_get(data, "phone"), PHONE_MAX),
        address=sanitize_string(_get(data, "address"), ADDRESS_MAX),
        linkedin=sanitize_string(_get(data, "linkedin"), SHORT_TEXT_MAX),
        github=sanitize_string(_get(data, "github"), SHORT_TEXT_MAX),
        portfolio=sanitize_string(_get(data, "portfolio"), SHORT_TEXT_MAX),
        professional_summary=sanitize_string(
            _get(data, "professionalSummary"), LONG_TEXT_MAX
        ),
        date_of_birth=sanitize_string(_get(data, "dateOfBirth"), DATE_MAX),
        nationality=sanitize_string(_get(data, "nationality"), LANGUAGE_NAME_MAX),
        location=sanitize_string(_get(data, "location"), SHORT_TEXT_MAX),
        languages=sanitize_list(_get(data, "languages")),
    )


def sanitize_skills(value: Any) -> List[str]:
    """Flat skill names; grouped entries contribute their items or their category."""
    if not isinstance(value, (list, tuple)):
        return sanitize_list(value, SKILL_MAX)

    flat: List[Any] = []
    for skill in value:
        if isinstance(skill, Mapping):
            items = _get(skill, "items")
            if isinstance(items, (list, tuple)):
                flat.extend(item for item in items if isinstance(item, str))
            elif _get(skill, "category"):
                flat.append(_get(skill, "category"))
        elif skill is not None:
            flat.append(skill)
    return sanitize_list(flat, SKILL_MAX)


def _sanitize_work(item: Mapping, id_factory: IdFactory) -> SanitizedWorkExperience:
    return SanitizedWorkExperience(
        id=_entry_id(item, id_factory),
        job_title=sanitize_string(_get(item, "jobTitle"), SHORT_TEXT_MAX),
        company=sanitize_string(_get(item, "company"), SHORT_TEXT_MAX),
        location=sanitize_string(_get(item, "location"), SHORT_TEXT_MAX),
        start_date=sanitize_string(_get(item, "startDate"), DATE_MAX),
        end_date=sanitize_string(_get(item, "endDate"), DATE_MAX),
        achievements=sanitize_list(_get(item, "achievements")),
        technologies=sanitize_list(_get(item, "technologies"), SKILL_MAX),
    )


def _sanitize_education(item: Mapping, id_factory: IdFactory) -> SanitizedEducation:
    return SanitizedEducation(
        id=_entry_id(item, id_factory),
        degree=sanitize_string(_get(item, "degree"), SHORT_TEXT_MAX),
        institution=sanitize_string(_get(item, "institution"), SHORT_TEXT_MAX),
        location=sanitize_string(_get(item, "location"), SHORT_TEXT_MAX),
        start_date=sanitize_string(_get(item, "startDate"), DATE_MAX),
        end_date=sanitize_string(_get(item, "endDate"), DATE_MAX),
        gpa=sanitize_string(_get(item, "gpa"), GPA_MAX),
        relevant_coursework=sanitize_list(_get(item, "relevantCoursework")),
        honors=sanitize_list(_get(item, "honors")),
    )


def _sanitize_certification(
    item: Mapping, id_factory: IdFactory
) -> SanitizedCertification:
    return SanitizedCertification(
        id=_entry_id(item, id_factory),
        name=sanitize_string(_get(item, "name"), SHORT_TEXT_MAX),
        issuing_organization=sanitize_string(
            _get(item, "issuingOrganization"), SHORT_TEXT_MAX
        ),
        issue_date=sanitize_string(_get(item, "issueDate"), DATE_MAX),
        expiration_date=sanitize_string(_get(item, "expirationDate"), DATE_MAX),
        credential_id=sanitize_string(_get(item, "credentialId"), SHORT_TEXT_MAX),
    )


def _sanitize_project(item: Mapping, id_factory: IdFactory) -> SanitizedProject:
    return SanitizedProject(
        id=_entry_id(item, id_factory),
        name=sanitize_string(_get(item, "name"), SHORT_TEXT_MAX),
        description=sanitize_string(_get(item, "description"), LONG_TEXT_MAX),
        start_date=sanitize_string(_get(item, "startDate"), DATE_MAX),
        end_date=sanitize_string(_get(item, "endDate"), DATE_MAX),
        github_url=sanitize_string(_get(item, "githubUrl"), URL_MAX),
        live_url=sanitize_string(_get(item, "liveUrl"), URL_MAX),
        technologies=sanitize_list(_get(item, "technologies"), SKILL_MAX),
        highlights=sanitize_list(_get(item, "highlights")),
    )


def _sanitize_volunteer(
    item: Mapping, id_factory: IdFactory
) -> SanitizedVolunteerExperience:
    return SanitizedVolunteerExperience(
        id=_entry_id(item, id_factory),
        role=sanitize_string(_get(item, "role"), SHORT_TEXT_MAX),
        organization=sanitize_string(_get(item, "organization"), SHORT_TEXT_MAX),
        location=sanitize_string(_get(item, "location"), SHORT_TEXT_MAX),
        start_date=sanitize_string(_get(item, "startDate"), DATE_MAX),
        end_date=sanitize_string(_get(item, "endDate"), DATE_MAX),
        current=sanitize_bool(_get(item, "current")),
        description=sanitize_string(_get(item, "description"), LONG_TEXT_MAX),
        impact=sanitize_string(_get(item, "impact"), MEDIUM_TEXT_MAX),
        achievements=sanitize_list(_get(item, "achievements")),
        hours_per_week=sanitize_number(_get(item, "hoursPerWeek")),
        total_hours=sanitize_number(_get(item, "totalHours")),
    )


def _sanitize_award(item: Mapping, id_factory: IdFactory) -> SanitizedAward:
    return SanitizedAward(
        id=_entry_id(item, id_factory),
        name=sanitize_string(_get(item, "name"), SHORT_TEXT_MAX),
        organization=sanitize_string(_get(item, "organization"), SHORT_TEXT_MAX),
        date=sanitize_string(_get(item, "date"), DATE_MAX),
        description=sanitize_string(_get(item, "description"), MEDIUM_TEXT_MAX),
        category=sanitize_string(_get(item, "category"), SHORT_TEXT_MAX),
    )


def _sanitize_language(item: Any, id_factory: IdFactory) -> SanitizedLanguage:
    if not isinstance(item, Mapping):
        # Plain "Spanish" entries become a name-only language
        return SanitizedLanguage(
            id=sanitize_string(id_factory(), ID_MAX),
            name=sanitize_string(item, LANGUAGE_NAME_MAX),
        )
    return SanitizedLanguage(
        id=_entry_id(item, id_factory),
        name=sanitize_string(_get(item, "name"), LANGUAGE_NAME_MAX),
        proficiency=sanitize_string(_get(item, "proficiency"), LANGUAGE_NAME_MAX),
        certification=sanitize_string(_get(item, "certification"), SHORT_TEXT_MAX),
    )


def _sanitize_reference(item: Mapping, id_factory: IdFactory) -> SanitizedReference:
    return SanitizedReference(
        id=_entry_id(item, id_factory),
        name=sanitize_string(_get(item, "name"), SHORT_TEXT_MAX),
        title=sanitize_string(_get(item, "title"), SHORT_TEXT_MAX),
        company=sanitize_string(_get(item, "company"), SHORT_TEXT_MAX),
        email=sanitize_string(_get(item, "email"), EMAIL_MAX),
        phone=sanitize_string(_get(item, "phone"), PHONE_MAX),
        relationship=sanitize_string(_get(item, "relationship"), SHORT_TEXT_MAX),
    )


def _sanitize_entries(
    value: Any, sanitize_entry: Callable[[Mapping, IdFactory], Any], id_factory: IdFactory
) -> list:
    return [sanitize_entry(item, id_factory) for item in _mapping_items(value)]


def _language_items(data: Mapping) -> List[Any]:
    value = _get(data, "languageSkills")
    if value is None:
        value = _get(data, "languages")
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (list, tuple)):
        return [
            item
            for item in value
            if isinstance(item, Mapping) or sanitize_string(item).strip()
        ]
    if isinstance(value, str):
        return sanitize_list(value, LANGUAGE_NAME_MAX)
    return []


def sanitize_resume(
    untrusted: Any,
    id_factory: Optional[IdFactory] = None,
    require_identity: Optional[bool] = None,
    placeholder: Optional[str] = None,
) -> SanitizedResume:
    """Coerce an untrusted resume payload into a render-safe record.

    Raises ResumeValidationError only for unusable shapes; everything else is
    coerced. Idempotent: sanitizing a sanitized resume returns an equal record.
    """
    if isinstance(untrusted, BaseModel):
        untrusted = untrusted.model_dump(by_alias=True)
    if not isinstance(untrusted, Mapping):
        raise ResumeValidationError(
            f"Resume data must be an object, got {type(untrusted).__name__}"
        )

    personal_info = _get(untrusted, "personalInfo")
    if personal_info is None:
        personal_info = {}
    elif not isinstance(personal_info, Mapping):
        raise ResumeValidationError("personalInfo must be an object")

    if require_identity is None:
        require_identity = settings.require_identity
    ids = resolve_id_factory(id_factory)

    sanitized = SanitizedResume(
        personal_info=sanitize_personal_info(
            personal_info, placeholder, require_identity
        ),
        work_experience=_sanitize_entries(
            _get(untrusted, "workExperience"), _sanitize_work, ids
        ),
        skills=sanitize_skills(_get(untrusted, "skills")),
        education=_sanitize_entries(
            _get(untrusted, "education"), _sanitize_education, ids
        ),
        certifications=_sanitize_entries(
            _get(untrusted, "certifications"), _sanitize_certification, ids
        ),
        projects=_sanitize_entries(_get(untrusted, "projects"), _sanitize_project, ids),
        volunteer_experience=_sanitize_entries(
            _get(untrusted, "volunteerExperience"), _sanitize_volunteer, ids
        ),
        awards=_sanitize_entries(_get(untrusted, "awards"), _sanitize_award, ids),
        languages=[_sanitize_language(item, ids) for item in _language_items(untrusted)],
        references=_sanitize_entries(
            _get(untrusted, "references"), _sanitize_reference, ids
        ),
        hobbies=sanitize_list(_get(untrusted, "hobbies")),
        available_on_request=sanitize_bool(_get(untrusted, "availableOnRequest")),
    )
    logger.debug(
        "Sanitized resume for %r: %d work, %d skills, %d education",
        sanitized.personal_info.full_name,
        len(sanitized.work_experience),
        len(sanitized.skills),
        len(sanitized.education),
    )
    return sanitized
