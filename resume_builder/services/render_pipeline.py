# resume_builder/services/render_pipeline.py
"""
Sanitize, then render with degrade-and-retry.

The policy is an ordered list of record reductions. Each is rendered in a
worker thread under a timeout; a renderer failure moves on to the next
reduction, a timeout ends the attempt immediately.
"""
import asyncio
import logging
from typing import Any, Callable, List, NamedTuple, Optional, Sequence

from resume_builder.config import settings
from resume_builder.errors import RendererError, RenderTimeoutError
from resume_builder.models import SanitizedPersonalInfo, SanitizedResume
from resume_builder.parsers.types import IdFactory
from resume_builder.services.pdf_renderer import PdfRenderer
from resume_builder.services.resume_sanitizer import sanitize_resume

logger = logging.getLogger(__name__)

RecordReduction = Callable[[SanitizedResume], SanitizedResume]


class DegradeTier(NamedTuple):
    name: str
    reduce: RecordReduction


def full_record(resume: SanitizedResume) -> SanitizedResume:
    return resume


def minimal_record(
    resume: SanitizedResume,
    max_work_entries: Optional[int] = None,
    max_achievements: Optional[int] = None,
    max_skills: Optional[int] = None,
    max_education: Optional[int] = None,
) -> SanitizedResume:
    """Identity, summary, and the first few jobs, skills and degrees only."""
    if max_work_entries is None:
        max_work_entries = settings.minimal_max_work_entries
    if max_achievements is None:
        max_achievements = settings.minimal_max_achievements
    if max_skills is None:
        max_skills = settings.minimal_max_skills
    if max_education is None:
        max_education = settings.minimal_max_education

    info = resume.personal_info
    return SanitizedResume(
        personal_info=SanitizedPersonalInfo(
            full_name=info.full_name,
            email=info.email,
            phone=info.phone,
            professional_summary=info.professional_summary,
        ),
        work_experience=[
            job.model_copy(
                update={
                    "achievements": job.achievements[:max_achievements],
                    "technologies": [],
                }
            )
            for job in resume.work_experience[:max_work_entries]
        ],
        skills=resume.skills[:max_skills],
        education=[
            edu.model_copy(update={"relevant_coursework": [], "honors": []})
            for edu in resume.education[:max_education]
        ],
    )


class DegradePolicy:
    def __init__(self, tiers: Sequence[DegradeTier]):
        if not tiers:
            raise ValueError("DegradePolicy needs at least one tier")
        self.tiers: List[DegradeTier] = list(tiers)

    @classmethod
    def default(cls) -> "DegradePolicy":
        return cls(
            [
                DegradeTier("full", full_record),
                DegradeTier("minimal", minimal_record),
            ]
        )


async def render_resume(
    untrusted: Any,
    renderer: Optional[PdfRenderer] = None,
    policy: Optional[DegradePolicy] = None,
    timeout: Optional[float] = None,
    id_factory: Optional[IdFactory] = None,
) -> bytes:
    """Render untrusted resume data to PDF bytes.

    Raises ResumeValidationError (nothing rendered), RenderTimeoutError
    (no retry) or RendererError (every tier failed).
    """
    # Validation errors propagate before any rendering happens
    resume = sanitize_resume(untrusted, id_factory=id_factory)

    renderer = renderer or PdfRenderer()
    policy = policy or DegradePolicy.default()
    if timeout is None:
        timeout = settings.render_timeout_seconds

    attempts: List[str] = []
    for tier in policy.tiers:
        record = tier.reduce(resume)
        try:
            pdf = await asyncio.wait_for(
                asyncio.to_thread(renderer.render, record), timeout=timeout
            )
        except asyncio.TimeoutError as e:
            attempts.append(f"{tier.name}: timed out after {timeout:g}s")
            logger.error("PDF rendering (%s) timed out after %gs", tier.name, timeout)
            raise RenderTimeoutError(
                f"PDF generation timed out after {timeout:g} seconds",
                attempts=attempts,
            ) from e
        except Exception as e:
            attempts.append(f"{tier.name}: {e}")
            logger.warning("PDF rendering (%s) failed: %s", tier.name, e)
            continue

        if not pdf:
            attempts.append(f"{tier.name}: renderer returned no data")
            logger.warning("PDF rendering (%s) returned no data", tier.name)
            continue

        logger.info("Rendered resume PDF with the %s tier (%d bytes)", tier.name, len(pdf))
        return pdf

    logger.error("PDF rendering failed on every tier: %s", "; ".join(attempts))
    raise RendererError(
        "PDF generation failed even with simplified content", attempts=attempts
    )
