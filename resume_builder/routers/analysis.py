import logging
import traceback

from fastapi import APIRouter, File, HTTPException, UploadFile

from resume_builder.models import AnalyzeResumeResponse
from resume_builder.services.resume_analysis import analyze_resume
from resume_builder.utils import read_upload_text

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/analyze-resume/", response_model=AnalyzeResumeResponse)
async def analyze_resume_endpoint(file: UploadFile = File(...)):
    """
    Upload a resume and get a score with strengths, weaknesses, missing
    keywords and suggestions. Falls back to a heuristic score when the LLM
    is not configured or fails.
    """
    try:
        _, _, text = await read_upload_text(file)
        analysis = await analyze_resume(text)
        return AnalyzeResumeResponse(**analysis.model_dump())
    except HTTPException as e:
        raise e
    except Exception as e:
        logger.error("Unexpected error in /analyze-resume/ endpoint: %s", e)
        traceback.print_exc()
        raise HTTPException(
            status_code=500,
            detail=f"An internal server error occurred while analyzing the resume: {str(e)}",
        )
