import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

load_dotenv()

from resume_builder import __version__
from resume_builder.config import settings

# Import routers
from resume_builder.routers import analysis, resume

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.app_name,
    description="FastAPI backend to extract, parse, analyze and render resumes.",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(resume.router, prefix="/api/v1", tags=["Resume Parsing"])
app.include_router(analysis.router, prefix="/api/v1", tags=["Resume Analysis"])


@app.get("/")
async def root():
    return {"message": "Resume Builder API is running. Use endpoints under /api/v1/"}


# Local development runner
if __name__ == "__main__":
    import uvicorn

    uvicorn.run("resume_builder.main:app", host="127.0.0.1", port=8000, reload=True)
