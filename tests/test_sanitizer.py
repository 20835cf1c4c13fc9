import pytest

from resume_builder.errors import ResumeValidationError
from resume_builder.parsers import parse_resume_text
from resume_builder.services.resume_sanitizer import (
    resolve_full_name,
    sanitize_list,
    sanitize_number,
    sanitize_resume,
    sanitize_skills,
    sanitize_string,
)
from conftest import JOHN_SMITH_TEXT, make_counter_id_factory

MESSY_RESUME = {
    "personalInfo": {
        "fullName": "  Ada\x00 Lovelace\x7f ",
        "email": "ada@example.com",
        "phone": 5551234567,
        "professionalSummary": "x" * 2000,
        "languages": "English, French",
    },
    "workExperience": [
        {
            "jobTitle": "Engineer\ufffe",
            "company": None,
            "achievements": "Shipped v1, Fixed bugs",
        },
        "not an entry",
        {"id": "", "jobTitle": "", "achievements": None},
    ],
    "skills": [{"category": "Backend", "items": ["Python", 3]}, {"category": "Cloud"}, "SQL", None],
    "education": {"degree": "BSc", "gpa": 3.9},
    "volunteerExperience": [
        {"role": "Mentor", "current": "true", "hoursPerWeek": "5", "totalHours": "lots"}
    ],
    "languageSkills": ["Spanish", {"name": "German", "proficiency": "advanced"}],
    "references": [{"name": "Bob"}],
    "hobbies": "chess,  , climbing",
    "availableOnRequest": 1,
}


def _all_strings(value):
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for item in value.values():
            yield from _all_strings(item)
    elif isinstance(value, list):
        for item in value:
            yield from _all_strings(item)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, " "),
        ("", " "),
        ("   ", " "),
        ("a\x00b\x7fc\x9f", "abc"),
        ("tab\tand\nnewline", "tab\tand\nnewline"),
        ("bad\ufffe\uffff\ud800chars", "badchars"),
        ("plane\U0001fffe\U0010ffff one", "plane one"),
        (42, "42"),
    ],
)
def test_sanitize_string(value, expected):
    assert sanitize_string(value) == expected


def test_sanitize_string_truncates_with_ellipsis():
    result = sanitize_string("y" * 2000, 1000)
    assert len(result) == 1000
    assert result.endswith("...")
    assert sanitize_string(result, 1000) == result


@pytest.mark.parametrize(
    "value, expected",
    [
        (["a", None, " ", "b"], ["a", "b"]),
        ("a, b,,c", ["a", "b", "c"]),
        (7, ["7"]),
        (None, []),
        ([], []),
    ],
)
def test_sanitize_list(value, expected):
    assert sanitize_list(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("12", 12.0), (3, 3.0), (" 2.5 ", 2.5), ("", None), ("abc", None), (None, None), (True, None), (float("nan"), None)],
)
def test_sanitize_number(value, expected):
    assert sanitize_number(value) == expected


def test_name_is_derived_from_email_local_part():
    resume = sanitize_resume({"personalInfo": {"email": "jane.doe@x.com"}})
    assert resume.personal_info.full_name == "Jane Doe"


def test_name_falls_back_to_placeholder():
    resume = sanitize_resume({"personalInfo": {"fullName": "", "email": None}})
    assert resume.personal_info.full_name == "Resume"
    assert resume.personal_info.full_name.strip()


def test_resolve_full_name_prefers_explicit_name():
    assert resolve_full_name("Grace Hopper", "x@y.com") == "Grace Hopper"
    assert resolve_full_name(None, "mary_ann-smith@y.com") == "Mary Ann Smith"
    assert resolve_full_name(None, None, placeholder="Anonymous") == "Anonymous"


def test_identity_can_be_required():
    with pytest.raises(ResumeValidationError):
        sanitize_resume({"personalInfo": {}}, require_identity=True)


def test_long_summary_is_truncated():
    resume = sanitize_resume({"personalInfo": {"professionalSummary": "s" * 2000}})
    summary = resume.personal_info.professional_summary
    assert len(summary) <= 1000
    assert summary.endswith("...")


@pytest.mark.parametrize("payload", [None, "resume", ["a"], 3])
def test_non_mapping_payload_is_rejected(payload):
    with pytest.raises(ResumeValidationError):
        sanitize_resume(payload)


def test_non_mapping_personal_info_is_rejected():
    with pytest.raises(ResumeValidationError):
        sanitize_resume({"personalInfo": ["Jane"]})


def test_missing_personal_info_is_tolerated():
    assert sanitize_resume({}).personal_info.full_name == "Resume"


def test_messy_payload_is_coerced():
    resume = sanitize_resume(MESSY_RESUME, id_factory=make_counter_id_factory())
    info = resume.personal_info

    assert info.full_name == "Ada Lovelace"
    assert info.phone == "5551234567"
    assert info.languages == ["English", "French"]
    assert len(info.professional_summary) == 1000

    assert [job.job_title for job in resume.work_experience] == ["Engineer", " "]
    assert resume.work_experience[0].company == " "
    assert resume.work_experience[0].achievements == ["Shipped v1", "Fixed bugs"]
    assert resume.work_experience[1].id == "id-2"

    assert resume.skills == ["Python", "Cloud", "SQL"]
    assert resume.education[0].gpa == "3.9"

    volunteer = resume.volunteer_experience[0]
    assert volunteer.current is True
    assert volunteer.hours_per_week == 5.0
    assert volunteer.total_hours is None

    assert [(l.name, l.proficiency) for l in resume.languages] == [
        ("Spanish", " "),
        ("German", "advanced"),
    ]
    assert resume.hobbies == ["chess", "climbing"]
    assert resume.available_on_request is True


def test_uncoercible_hours_are_left_out_of_the_output():
    resume = sanitize_resume(
        {"volunteerExperience": [{"role": "Mentor", "hoursPerWeek": "lots", "totalHours": "12"}]}
    )
    dumped = resume.model_dump(by_alias=True)["volunteerExperience"][0]
    assert "hoursPerWeek" not in dumped
    assert dumped["totalHours"] == 12.0
    assert "hours_per_week" not in resume.volunteer_experience[0].model_dump()
    assert "hoursPerWeek" not in resume.model_dump_json(by_alias=True)


def test_sanitized_strings_are_never_empty():
    dumped = sanitize_resume(MESSY_RESUME).model_dump(by_alias=True)
    strings = list(_all_strings(dumped))
    assert strings
    assert all(s != "" for s in strings)


def test_sanitize_is_idempotent():
    once = sanitize_resume(MESSY_RESUME, id_factory=make_counter_id_factory())
    assert sanitize_resume(once) == once
    assert sanitize_resume(once.model_dump(by_alias=True)) == once
    assert sanitize_resume(once.model_dump()) == once


def test_sanitize_returns_a_fresh_record():
    once = sanitize_resume(MESSY_RESUME)
    again = sanitize_resume(once)
    assert again is not once
    again.skills.append("Rust")
    assert "Rust" not in once.skills


def test_parsed_resume_can_be_sanitized_directly(id_factory):
    parsed = parse_resume_text(JOHN_SMITH_TEXT, id_factory=id_factory)
    resume = sanitize_resume(parsed)
    assert resume.personal_info.full_name == "John Smith"
    assert resume.work_experience[0].job_title == "Software Engineer"
    assert resume.work_experience[0].id == parsed.work_experience[0].id
    assert resume.education[0].gpa == " "


def test_skills_accept_comma_string():
    assert sanitize_skills("Python, Go") == ["Python", "Go"]
