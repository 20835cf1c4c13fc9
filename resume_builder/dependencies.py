from typing import Callable, List, Optional

from resume_builder.parsers.extract_resume_from_sections.lib.ids import random_id
from resume_builder.parsers.types import IdFactory
from resume_builder.services.pdf_renderer import PdfRenderer
from resume_builder.services.render_pipeline import DegradePolicy

# Builds a renderer for a section order (None means the default order)
RendererFactory = Callable[[Optional[List[str]]], PdfRenderer]


# Overridable in tests via app.dependency_overrides
def get_renderer_factory() -> RendererFactory:
    return PdfRenderer


def get_degrade_policy() -> DegradePolicy:
    return DegradePolicy.default()


def get_id_factory() -> IdFactory:
    return random_id
