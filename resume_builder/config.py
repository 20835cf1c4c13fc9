from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    app_name: str = "Resume Builder API"
    log_level: str = "INFO"
    # Comma-separated list of allowed origins
    cors_origins: str = "*"

    # LLM analysis is optional; without a key the heuristic fallback is used
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"

    # Upload / extraction limits
    max_upload_bytes: int = 10 * 1024 * 1024
    min_extracted_chars: int = 50
    raw_scan_min_chars: int = 50

    # Parsing
    section_strategy: str = "keyword"  # "keyword" or "heading"

    # Sanitize / render
    name_placeholder: str = "Resume"
    require_identity: bool = False
    render_timeout_seconds: float = 30.0
    # <templates_dir>/<templateId>.json, each carrying a "section_order" list
    templates_dir: str = "templates/generated"
    minimal_max_work_entries: int = 2
    minimal_max_achievements: int = 2
    minimal_max_skills: int = 5
    minimal_max_education: int = 1

    # Heuristic analysis scoring
    fallback_score_base: int = 50
    fallback_score_cap: int = 85

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        case_sensitive = False

    def get_cors_origins(self) -> list:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()
