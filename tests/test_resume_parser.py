import re

import pytest

from resume_builder.models import ParsedResume
from resume_builder.parsers import parse_resume_from_upload, parse_resume_text
from resume_builder.parsers.extract_resume_from_sections.lib.common_features import (
    parse_date_range,
    split_title_line,
)
from resume_builder.parsers.extract_resume_from_sections.lib.ids import random_id
from conftest import (
    FULL_RESUME_TEXT,
    JOHN_SMITH_TEXT,
    make_counter_id_factory,
    make_pdf,
)

LIST_FIELDS = [
    "work_experience",
    "education",
    "skills",
    "certifications",
    "projects",
    "volunteer_experience",
    "awards",
    "languages",
    "references",
]


def test_john_smith_resume(id_factory):
    resume = parse_resume_text(JOHN_SMITH_TEXT, id_factory=id_factory)

    assert resume.personal_info.full_name == "John Smith"
    assert resume.personal_info.email == "john@x.com"

    assert len(resume.work_experience) == 1
    job = resume.work_experience[0]
    assert job.job_title == "Software Engineer"
    assert job.company == "Acme"
    assert "Jan 2020" in job.start_date
    assert job.end_date == "Present"
    assert job.achievements == ["Built systems"]

    assert len(resume.education) == 1
    edu = resume.education[0]
    assert "B.S. Computer Science" in edu.degree
    assert (edu.start_date, edu.end_date) == ("2016", "2020")


def test_skills_line_is_split_on_separators():
    resume = parse_resume_text("SKILLS\nPython, React; Node | SQL")
    assert resume.skills == ["Python", "React", "Node", "SQL"]


def test_skills_keep_duplicates_and_drop_single_characters():
    resume = parse_resume_text("SKILLS\nPython, C, Go\nPython")
    assert resume.skills == ["Python", "Go", "Python"]


@pytest.mark.parametrize(
    "text",
    ["", "   \n\n\t", "\x00\x01 @@@ ### %%%", "lorem ipsum dolor sit amet", None],
)
def test_parse_is_total(text):
    resume = parse_resume_text(text)
    assert isinstance(resume, ParsedResume)
    for field in LIST_FIELDS:
        value = getattr(resume, field)
        assert isinstance(value, list)
        assert value == []


def test_work_bullets_come_only_from_the_experience_section():
    text = "\n".join(
        [
            "Jane Doe",
            "- Stray bullet before any section",
            "EXPERIENCE",
            "Data Analyst at Initech",
            "- Built dashboards",
            "- Automated reports",
            "EDUCATION",
            "- Tutored statistics",
            "Master of Science, State University",
        ]
    )
    lines = text.splitlines()
    start, end = lines.index("EXPERIENCE"), lines.index("EDUCATION")
    allowed = {line.lstrip("-• ").strip() for line in lines[start + 1 : end]}

    resume = parse_resume_text(text)
    achievements = [a for job in resume.work_experience for a in job.achievements]
    assert achievements == ["Built dashboards", "Automated reports"]
    assert set(achievements) <= allowed


def test_lines_before_the_first_entry_are_ignored():
    resume = parse_resume_text("EXPERIENCE\n- Orphan bullet\nLead Engineer at Umbrella\n- Real bullet")
    assert len(resume.work_experience) == 1
    assert resume.work_experience[0].achievements == ["Real bullet"]


def test_full_resume(id_factory):
    resume = parse_resume_text(FULL_RESUME_TEXT, id_factory=id_factory)
    info = resume.personal_info

    assert info.full_name == "Jane Doe"
    assert info.email == "jane.doe@example.com"
    assert info.phone == "(555) 123-4567"
    assert info.address == "Austin, TX"
    assert info.linkedin == "linkedin.com/in/jane-doe"
    assert info.github == "github.com/janedoe"
    assert info.professional_summary == "Backend engineer focused on reliable APIs."

    assert [(j.job_title, j.company) for j in resume.work_experience] == [
        ("Senior Developer", "Globex"),
        ("Junior Developer", "Initech"),
    ]
    assert resume.work_experience[0].achievements == [
        "Led migration to FastAPI",
        "Cut latency by 40%",
    ]
    assert resume.work_experience[1].start_date == "2016"

    edu = resume.education[0]
    assert edu.degree == "B.S. Computer Science"
    assert edu.institution == "State University"
    assert edu.gpa == "3.8/4.0"
    assert edu.relevant_coursework == ["Algorithms", "Databases"]
    assert edu.honors == ["Dean's List"]

    assert resume.skills == ["Python", "FastAPI", "PostgreSQL", "Docker"]

    project = resume.projects[0]
    assert project.name == "Resume Parser Tool"
    assert (project.start_date, project.end_date) == ("Jan 2021", "Mar 2021")
    assert project.technologies == ["Python", "pdfplumber"]
    assert project.highlights == ["Parsed thousands of resumes"]

    assert [c.name for c in resume.certifications] == [
        "AWS Certified Solutions Architect"
    ]
    assert [(a.name, a.category) for a in resume.awards] == [
        ("Employee of the Year", "other")
    ]
    assert [(l.name, l.proficiency) for l in resume.languages] == [
        ("English", "native"),
        ("Spanish", "intermediate"),
        ("French", "beginner"),
    ]
    assert resume.references == []


def test_volunteer_entries():
    resume = parse_resume_text(
        "VOLUNTEER\nMentor at Code Club\n2019 - 2020\n- Taught kids Python"
    )
    entry = resume.volunteer_experience[0]
    assert (entry.role, entry.organization) == ("Mentor", "Code Club")
    assert (entry.start_date, entry.end_date) == ("2019", "2020")
    assert entry.achievements == ["Taught kids Python"]


def test_references_are_listed_one_per_line():
    resume = parse_resume_text("REFERENCES\nDr. Alice Brown, Stanford\nBob")
    assert [r.name for r in resume.references] == ["Dr. Alice Brown, Stanford"]


def test_ids_come_from_the_injected_factory():
    first = parse_resume_text(FULL_RESUME_TEXT, id_factory=make_counter_id_factory())
    second = parse_resume_text(FULL_RESUME_TEXT, id_factory=make_counter_id_factory())
    assert first == second
    assert first.work_experience[0].id == "id-1"


def test_default_ids_are_unique_hex_tokens():
    resume = parse_resume_text(FULL_RESUME_TEXT)
    ids = [job.id for job in resume.work_experience] + [
        lang.id for lang in resume.languages
    ]
    assert len(set(ids)) == len(ids)
    assert all(re.fullmatch(r"[0-9a-f]{9}", i) for i in ids)
    assert len(random_id()) == 9


def test_output_serialises_with_camel_case_aliases():
    dumped = parse_resume_text(JOHN_SMITH_TEXT).model_dump(by_alias=True)
    assert dumped["personalInfo"]["fullName"] == "John Smith"
    assert dumped["workExperience"][0]["jobTitle"] == "Software Engineer"


@pytest.mark.parametrize(
    "line, expected",
    [
        ("Jan 2020 - Present", ("Jan 2020", "Present")),
        ("June 2018 – Dec 2019", ("June 2018", "Dec 2019")),
        ("2016 - 2020", ("2016", "2020")),
        ("2019 - now", ("2019", "now")),
        ("Summer internship", None),
    ],
)
def test_parse_date_range(line, expected):
    assert parse_date_range(line) == expected


def test_split_title_line_uses_separator_priority():
    assert split_title_line("Engineer at Acme - Remote") == ("Engineer", "Acme - Remote")
    assert split_title_line("Engineer | Acme") == ("Engineer", "Acme")
    assert split_title_line("Engineer") == ("Engineer", None)


def test_parse_resume_from_upload(id_factory):
    text, resume = parse_resume_from_upload(
        make_pdf(JOHN_SMITH_TEXT.replace("•", "-")), "application/pdf", id_factory
    )
    assert "John Smith" in text
    assert resume.work_experience[0].achievements == ["Built systems"]
