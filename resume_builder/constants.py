PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
DOC_MEDIA_TYPE = "application/msword"

# Declared media type (MIME or short name) -> document kind
MEDIA_TYPE_KINDS = {
    PDF_MEDIA_TYPE: "pdf",
    DOCX_MEDIA_TYPE: "docx",
    DOC_MEDIA_TYPE: "doc",
    "pdf": "pdf",
    "docx": "docx",
    "doc": "doc",
}

# Page geometry used by the PDF renderer (points)
A4_WIDTH_PT = 595
A4_HEIGHT_PT = 842
PAGE_MARGIN_PT = 50

# Default section order of the rendered document
DEFAULT_SECTION_ORDER = [
    "Professional Summary",
    "Work Experience",
    "Skills",
    "Education",
    "Certifications",
    "Projects",
    "Volunteer Experience",
    "Awards",
    "Languages",
    "References",
    "Hobbies & Interests",
]
