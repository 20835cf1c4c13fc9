import io
import itertools

import fitz  # PyMuPDF
import pytest
from docx import Document

JOHN_SMITH_TEXT = (
    "John Smith\njohn@x.com\n\nEXPERIENCE\nSoftware Engineer at Acme\n"
    "Jan 2020 - Present\n• Built systems\n\nEDUCATION\n"
    "B.S. Computer Science, State University\n2016 - 2020"
)

FULL_RESUME_TEXT = """Jane Doe
jane.doe@example.com | (555) 123-4567 | Austin, TX
linkedin.com/in/jane-doe | github.com/janedoe
SUMMARY
Backend engineer focused on reliable APIs.
EXPERIENCE
Senior Developer at Globex
Jun 2019 - Present
- Led migration to FastAPI
- Cut latency by 40%
Junior Developer at Initech
2016 - 2019
- Maintained billing scripts
EDUCATION
B.S. Computer Science from State University
2012 - 2016
GPA: 3.8/4.0
- Relevant Coursework: Algorithms, Databases
- Dean's List
SKILLS
Python, FastAPI; PostgreSQL | Docker
PROJECTS
Resume Parser Tool
Jan 2021 - Mar 2021
Tech Stack: Python, pdfplumber
- Parsed thousands of resumes
CERTIFICATIONS
AWS Certified Solutions Architect
AWARDS
Employee of the Year
LANGUAGES
English - Native
Spanish: Intermediate
French, basic
REFERENCES
Available upon request
"""


def make_counter_id_factory(prefix: str = "id"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def id_factory():
    return make_counter_id_factory()


def make_pdf(text: str, **save_options) -> bytes:
    """Text PDF with one inserted line per input line."""
    doc = fitz.open()
    page = doc.new_page()
    y = 72
    for line in text.splitlines():
        if y > 780:
            page = doc.new_page()
            y = 72
        page.insert_text((72, y), line, fontname="helv", fontsize=11)
        y += 15
    data = doc.tobytes(**save_options)
    doc.close()
    return data


def make_blank_pdf() -> bytes:
    doc = fitz.open()
    doc.new_page()
    data = doc.tobytes()
    doc.close()
    return data


def make_docx(paragraphs, table_rows=None) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row, values in zip(table.rows, table_rows):
            for cell, value in zip(row.cells, values):
                cell.text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def resume_pdf_bytes():
    # PDF fixtures use "-" bullets; Base-14 fonts have no "•" glyph
    return make_pdf(JOHN_SMITH_TEXT.replace("•", "-"))
