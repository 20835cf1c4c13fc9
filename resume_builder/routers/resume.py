import logging
import traceback

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response

from resume_builder.constants import PDF_MEDIA_TYPE
from resume_builder.dependencies import (
    RendererFactory,
    get_degrade_policy,
    get_id_factory,
    get_renderer_factory,
)
from resume_builder.errors import (
    RenderError,
    RenderTimeoutError,
    ResumeValidationError,
)
from resume_builder.models import GeneratePdfRequest, ParseResumeResponse
from resume_builder.parsers import parse_resume_text
from resume_builder.parsers.types import IdFactory
from resume_builder.services.render_pipeline import DegradePolicy, render_resume
from resume_builder.services.template_loader import section_order_for_template
from resume_builder.utils import read_upload_text

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/parse-resume/", response_model=ParseResumeResponse)
async def parse_resume_endpoint(
    file: UploadFile = File(...),
    id_factory: IdFactory = Depends(get_id_factory),
):
    """
    Upload a resume (PDF, DOCX or DOC) and get the extracted text plus the
    parsed structured data.
    """
    try:
        data, media_type, text = await read_upload_text(file)
        parsed_resume = parse_resume_text(text, id_factory=id_factory)

        return ParseResumeResponse(
            text=text,
            parsed_data=parsed_resume,
            file_name=file.filename,
            file_size=len(data),
            mime_type=media_type,
            extracted_length=len(text),
        )
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error("Error processing file %s: %s", file.filename, e)
        traceback.print_exc()
        raise HTTPException(
            status_code=500,
            detail=f"An error occurred while parsing the resume: {str(e)}",
        )


@router.post("/generate-pdf/")
async def generate_pdf_endpoint(
    request_data: GeneratePdfRequest,
    make_renderer: RendererFactory = Depends(get_renderer_factory),
    policy: DegradePolicy = Depends(get_degrade_policy),
    id_factory: IdFactory = Depends(get_id_factory),
):
    """
    Render resume JSON to a PDF. Content is sanitized first; when the full
    resume cannot be rendered a simplified version is tried.
    An optional templateId picks the section order from template metadata.
    """
    try:
        renderer = make_renderer(section_order_for_template(request_data.template_id))
        pdf_bytes = await render_resume(
            request_data.resume_data,
            renderer=renderer,
            policy=policy,
            id_factory=id_factory,
        )
    except ResumeValidationError as e:
        raise HTTPException(
            status_code=400,
            detail={
                "error": "Invalid resume data",
                "kind": e.kind.value,
                "message": str(e),
            },
        ) from e
    except RenderTimeoutError as e:
        raise HTTPException(status_code=504, detail=e.to_detail()) from e
    except RenderError as e:
        raise HTTPException(status_code=500, detail=e.to_detail()) from e
    except Exception as e:
        logger.error("Unexpected error in /generate-pdf/ endpoint: %s", e)
        traceback.print_exc()
        raise HTTPException(
            status_code=500,
            detail=f"An internal server error occurred while generating the PDF: {str(e)}",
        )

    return Response(
        content=pdf_bytes,
        media_type=PDF_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="resume.pdf"'},
    )
